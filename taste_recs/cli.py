"""
Command-Line Interface for Taste Recs
=====================================

Usage:
    taste-recs <command> [options]

    or

    python -m taste_recs.cli <command> [options]

Commands:
    clusters    List the onboarding taste clusters
    seed        Show the seed vector and home genres for chosen clusters
    quiz        Run the taste quiz (interactive or with scripted answers)
    rank        Rank catalog items from a JSON file against a taste vector

Examples:
    taste-recs clusters
    taste-recs seed dark-thrillers history-war cult-indie
    taste-recs quiz --clusters dark-thrillers history-war --answers A,B,both,A,skip,A,A,B,neither,A --save
    taste-recs rank items.json --method hybrid -n 10 --format simple
"""

import argparse
import json
import logging
import sys
from typing import Dict, List, Optional

from . import config
from .clusters import (
    TASTE_CLUSTERS,
    compute_cluster_seed_vector,
    derive_home_genres,
    get_top_genre_keys_from_clusters,
)
from .errors import TasteRecsError
from .explainer import ExplanationGenerator
from .profile import retake_quiz
from .quiz import QuizResult, QuizSession
from .ranking import (
    CatalogItem,
    DiversityFilter,
    hybrid_score,
    rank_by_similarity,
    reorder_within_windows,
)
from .scoring import AnswerChoice
from .store import ProfileStore
from .vector import TasteVector, vector_to_dict

logger = logging.getLogger(__name__)

ANSWER_CHOICES = [c.value for c in AnswerChoice]


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog='taste-recs',
        description='🎬 Taste Recs - taste vector onboarding and ranking',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment Variables:
  TASTE_RECS_PROFILE_PATH   Profile file (default: ~/.taste_recs/profile.json)
  TASTE_RECS_LEARNING_RATE  Interaction learning rate (default: 0.1)
  TASTE_RECS_LOG_LEVEL      Log level when not verbose (default: WARNING)
        """
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    sub = parser.add_subparsers(dest='command')
    sub.required = True

    p_clusters = sub.add_parser('clusters', help='List taste clusters')
    p_clusters.add_argument('--format', choices=['json', 'simple'], default='simple')

    p_seed = sub.add_parser('seed', help='Seed vector for a cluster selection')
    p_seed.add_argument('clusters', nargs='+', help='Cluster ids')
    p_seed.add_argument('--format', choices=['json', 'simple'], default='simple')

    p_quiz = sub.add_parser('quiz', help='Run the taste quiz')
    p_quiz.add_argument('--clusters', nargs='+', default=[], help='Cluster ids to seed from')
    p_quiz.add_argument(
        '--answers',
        type=str,
        default=None,
        help=f'Comma-separated scripted answers ({"/".join(ANSWER_CHOICES)}); prompts if omitted'
    )
    p_quiz.add_argument('--save', action='store_true', help='Store the result in the profile file')
    p_quiz.add_argument('--profile', type=str, default=None, help='Profile file path')
    p_quiz.add_argument('--format', choices=['json', 'simple'], default='simple')

    p_rank = sub.add_parser('rank', help='Rank catalog items')
    p_rank.add_argument('items', type=str, help='JSON file with a list of catalog items')
    p_rank.add_argument('--profile', type=str, default=None, help='Profile file path')
    p_rank.add_argument(
        '--clusters',
        nargs='+',
        default=None,
        help='Rank against a cluster seed instead of the stored profile'
    )
    p_rank.add_argument(
        '--method',
        choices=['hybrid', 'similarity', 'window'],
        default='hybrid',
        help='hybrid: match score with tie-breakers; similarity: weighted cosine; '
             'window: keep file order, re-sort within windows'
    )
    p_rank.add_argument('-n', '--num', type=int, default=20, help='Number of items (default: 20)')
    p_rank.add_argument('--diverse', action='store_true', help='Apply the diversity filter')
    p_rank.add_argument('-o', '--output', type=str, default=None, help='Output file path')
    p_rank.add_argument('--format', choices=['json', 'csv', 'simple'], default='json')

    return parser


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, config.LOG_LEVEL.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )


def _non_zero(vector: TasteVector) -> Dict[str, float]:
    return {d: round(v, 3) for d, v in vector_to_dict(vector).items() if v != 0}


# =============================================================================
# COMMANDS
# =============================================================================

def cmd_clusters(args) -> str:
    if args.format == 'json':
        return json.dumps(
            [{'id': c.id, 'name': c.name, 'description': c.description, 'vector': c.vector}
             for c in TASTE_CLUSTERS],
            indent=2, ensure_ascii=False,
        )
    lines = ["🎭 Taste clusters (pick 3-5):", "-" * 50]
    for c in TASTE_CLUSTERS:
        lines.append(f"{c.emoji}  {c.id:<26} {c.name}")
        lines.append(f"    {c.description}")
    return '\n'.join(lines)


def cmd_seed(args) -> str:
    seed = compute_cluster_seed_vector(args.clusters)
    result = {
        'clusters': args.clusters,
        'vector': _non_zero(seed),
        'top_genres': get_top_genre_keys_from_clusters(args.clusters),
        'home_genres': derive_home_genres(args.clusters),
    }
    if args.format == 'json':
        return json.dumps(result, indent=2)

    lines = [f"🌱 Seed vector for: {', '.join(args.clusters)}", "-" * 50]
    for dim, value in sorted(result['vector'].items(), key=lambda kv: -abs(kv[1])):
        lines.append(f"  {dim:<12} {value:+.3f}")
    lines.append("")
    lines.append(f"Top genres:  {', '.join(result['top_genres']) or '-'}")
    lines.append(f"Home genres: {result['home_genres']}")
    return '\n'.join(lines)


def _prompt_answer(pair, number: int, total: int) -> str:
    print(f"\n[{number}/{total}] Which would you rather watch?")
    print(f"  A) {pair.option_a.title} ({pair.option_a.year}): {pair.option_a.descriptor}")
    print(f"  B) {pair.option_b.title} ({pair.option_b.year}): {pair.option_b.descriptor}")
    while True:
        raw = input(f"  Answer [{'/'.join(ANSWER_CHOICES)}]: ").strip()
        if raw.upper() in ('A', 'B'):
            return raw.upper()
        if raw.lower() in ANSWER_CHOICES:
            return raw.lower()
        print("  Please choose one of the listed answers.")


def run_quiz(session: QuizSession, scripted: Optional[List[str]]) -> QuizResult:
    if scripted is not None:
        for choice in scripted:
            if session.is_complete:
                break
            session.answer(choice)
        # Unanswered pairs count as skipped
        while not session.is_complete:
            session.answer(AnswerChoice.SKIP)
    else:
        while not session.is_complete:
            pair = session.current_pair()
            session.answer(_prompt_answer(pair, len(session.answers) + 1, session.expected_total))
    return session.result()


def cmd_quiz(args) -> str:
    session = QuizSession.from_clusters(args.clusters)
    scripted = None
    if args.answers is not None:
        scripted = [a.strip() for a in args.answers.split(',') if a.strip()]
    result = run_quiz(session, scripted)

    if args.save:
        store = ProfileStore(args.profile)

        def apply(current):
            updated = retake_quiz(current, result.answers, result.vector, result.confidence)
            updated.selected_clusters = list(args.clusters)
            return updated

        store.update(apply)
        print(f"✅ Profile saved to: {store.path}", file=sys.stderr)

    if args.format == 'json':
        return result.to_json(indent=2)

    lines = [
        "🎉 Quiz complete!",
        ExplanationGenerator().summarize_quiz(result),
        "",
        "Strongest dimensions:",
    ]
    for dim, value in sorted(_non_zero(result.vector).items(), key=lambda kv: -abs(kv[1]))[:8]:
        lines.append(f"  {dim:<12} {value:+.3f}")
    return '\n'.join(lines)


def _load_items(path: str) -> List[CatalogItem]:
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get('results', data.get('items', []))
    if not isinstance(data, list):
        raise TasteRecsError(f"Expected a list of items in {path}")

    items = []
    for position, entry in enumerate(data):
        try:
            items.append(CatalogItem.from_dict(entry))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise TasteRecsError(f"Malformed item #{position} in {path}: {e!r}") from e
    return items


def _resolve_vector(args) -> TasteVector:
    if args.clusters:
        return compute_cluster_seed_vector(args.clusters)
    profile = ProfileStore(args.profile).load()
    if profile is None:
        raise TasteRecsError("No stored profile; run 'taste-recs quiz --save' or pass --clusters")
    return profile.vector


def rank_items(items: List[CatalogItem], vector: TasteVector, method: str) -> List[tuple]:
    if method == 'similarity':
        return [(item, float(score)) for item, score in rank_by_similarity(items, vector)]
    if method == 'window':
        ordered = reorder_within_windows(items, vector)
        return [(item, hybrid_score(item, vector)) for item in ordered]
    scored = [(item, hybrid_score(item, vector)) for item in items]
    scored.sort(key=lambda pair: -pair[1])
    return scored


def format_output(rows: List[Dict], fmt: str) -> str:
    """Format ranked items based on requested format."""
    if fmt == 'json':
        return json.dumps(rows, indent=2, ensure_ascii=False)

    elif fmt == 'csv':
        lines = ['id,media_type,title,score,reason']
        for row in rows:
            title = row['title'].replace('"', '""')
            reason = row['reason'].replace('"', '""')
            lines.append(f'{row["id"]},{row["media_type"]},"{title}",{row["score"]:.4f},"{reason}"')
        return '\n'.join(lines)

    elif fmt == 'simple':
        lines = [f"Top {len(rows)} picks:", "-" * 50]
        for i, row in enumerate(rows, 1):
            lines.append(f"{i:2}. {row['title']} ({row['media_type']})")
            lines.append(f"    Score: {row['score']:.4f}")
            lines.append(f"    Why: {row['reason']}")
            lines.append("")
        return '\n'.join(lines)

    return json.dumps(rows)


def cmd_rank(args) -> str:
    items = _load_items(args.items)
    vector = _resolve_vector(args)
    ranked = rank_items(items, vector, args.method)

    if args.diverse:
        ranked = DiversityFilter().filter(ranked, target_count=args.num)
    ranked = ranked[:args.num]

    explainer = ExplanationGenerator()
    rows = []
    for item, score in ranked:
        rows.append({
            'id': item.id,
            'media_type': item.media_type,
            'title': item.title,
            'score': round(float(score), 4),
            'reason': explainer.explain_item(item, vector).reason,
        })
    return format_output(rows, args.format)


COMMANDS = {
    'clusters': cmd_clusters,
    'seed': cmd_seed,
    'quiz': cmd_quiz,
    'rank': cmd_rank,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        output = COMMANDS[args.command](args)

        if getattr(args, 'output', None):
            with open(args.output, 'w', encoding='utf-8') as f:
                f.write(output)
            print(f"✅ Results saved to: {args.output}")
        else:
            print(output)

        return 0

    except (TasteRecsError, ValueError, OSError) as e:
        print(f"❌ Error: {str(e)}", file=sys.stderr)
        if args.verbose:
            logger.exception("Command %s failed", args.command)
        return 1


if __name__ == '__main__':
    sys.exit(main())
