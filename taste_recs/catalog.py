"""
Quiz Pair Catalog
=================

Pools of A/B title comparisons used by the onboarding quiz:

1. Fixed pairs (3): identical for every user, broad dimensional spread
2. Genre-responsive pairs (12): triggered by the user's genres or clusters
3. Adaptive pairs (25): picked to resolve the interim vector's ambiguity

Each option carries a partial vector position: binary genre values plus
meta axes. Only dimensions listed in a pair's dimensions_tested ever
contribute to a quiz delta.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .vector import dim_index, validate_partial


class QuizPhase(str, Enum):
    FIXED = "fixed"
    GENRE_RESPONSIVE = "genre-responsive"
    ADAPTIVE = "adaptive"


@dataclass(frozen=True)
class QuizOption:
    """One side of a quiz comparison."""
    content_id: int
    media_type: str  # "movie" or "tv"
    title: str
    year: int
    descriptor: str
    vector_position: Dict[str, float] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "vector_position", validate_partial(self.vector_position))

    def to_dict(self) -> Dict:
        return {
            "content_id": self.content_id,
            "media_type": self.media_type,
            "title": self.title,
            "year": self.year,
            "descriptor": self.descriptor,
        }


@dataclass(frozen=True)
class QuizPair:
    """Two options plus the dimensions the comparison is designed to discriminate."""
    id: str
    phase: QuizPhase
    option_a: QuizOption
    option_b: QuizOption
    dimensions_tested: Tuple[str, ...]
    trigger_genres: Tuple[str, ...] = ()
    trigger_clusters: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "phase", QuizPhase(self.phase))
        object.__setattr__(self, "dimensions_tested", tuple(self.dimensions_tested))
        object.__setattr__(self, "trigger_genres", tuple(self.trigger_genres))
        object.__setattr__(self, "trigger_clusters", tuple(self.trigger_clusters))
        for dim in self.dimensions_tested:
            dim_index(dim)

    @property
    def content_ids(self) -> Tuple[int, int]:
        return (self.option_a.content_id, self.option_b.content_id)

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "phase": self.phase.value,
            "option_a": self.option_a.to_dict(),
            "option_b": self.option_b.to_dict(),
            "dimensions_tested": list(self.dimensions_tested),
        }


def _opt(content_id, media_type, title, year, descriptor, **position) -> QuizOption:
    return QuizOption(content_id, media_type, title, year, descriptor, position)


def _pair(pair_id, phase, dims, a, b, genres=(), clusters=()) -> QuizPair:
    return QuizPair(pair_id, phase, a, b, tuple(dims), tuple(genres), tuple(clusters))


_F = QuizPhase.FIXED
_G = QuizPhase.GENRE_RESPONSIVE
_A = QuizPhase.ADAPTIVE

# =============================================================================
# FIXED PAIRS (shown to every user, in order)
# =============================================================================
FIXED_PAIRS: List[QuizPair] = [
    _pair(
        "fixed-1", _F, ["tone", "action", "musical", "intensity", "pacing"],
        _opt(155, "movie", "The Dark Knight", 2008, "Dark, intense superhero thriller",
             action=1.0, crime=1.0, drama=1.0, thriller=1.0,
             tone=-0.8, pacing=0.7, era=0.3, popularity=0.9, intensity=0.9),
        _opt(11631, "movie", "Mamma Mia!", 2008, "Feel-good ABBA musical comedy",
             comedy=1.0, musical=1.0, romance=1.0, family=1.0,
             tone=0.9, pacing=0.5, era=0.3, popularity=0.7, intensity=-0.6),
    ),
    _pair(
        "fixed-2", _F, ["scifi", "romance", "pacing", "era", "intensity"],
        _opt(27205, "movie", "Inception", 2010, "Mind-bending sci-fi heist thriller",
             action=1.0, scifi=1.0, thriller=1.0, adventure=1.0,
             tone=-0.4, pacing=0.8, era=0.5, popularity=0.9, intensity=0.8),
        _opt(4348, "movie", "Pride & Prejudice", 2005, "Elegant period romance drama",
             romance=1.0, drama=1.0,
             tone=0.3, pacing=-0.6, era=-0.7, popularity=0.5, intensity=-0.4),
    ),
    _pair(
        "fixed-3", _F, ["scifi", "horror", "history", "drama", "pacing", "era", "popularity"],
        _opt(66732, "tv", "Stranger Things", 2016, "Supernatural sci-fi horror series",
             scifi=1.0, horror=1.0, drama=1.0, mystery=1.0,
             tone=-0.5, pacing=0.6, era=0.6, popularity=0.9, intensity=0.7),
        _opt(65494, "tv", "The Crown", 2016, "Lavish royal historical drama",
             drama=1.0, history=1.0,
             tone=-0.1, pacing=-0.7, era=-0.6, popularity=0.7, intensity=-0.3),
    ),
]

# Genres the fixed pairs already probe
FIXED_PAIR_GENRES = frozenset({
    "action", "scifi", "thriller", "horror", "romance", "drama", "musical", "history",
})

# =============================================================================
# GENRE-RESPONSIVE POOL
# =============================================================================
GENRE_RESPONSIVE_POOL: List[QuizPair] = [
    _pair(
        "genre-animation", _G, ["animation", "action", "adventure", "tone", "era"],
        _opt(324857, "movie", "Spider-Man: Into the Spider-Verse", 2018,
             "Stylish animated superhero adventure",
             animation=1.0, action=1.0, adventure=1.0, scifi=1.0,
             tone=0.3, pacing=0.8, era=0.8, popularity=0.8, intensity=0.5),
        _opt(129, "movie", "Spirited Away", 2001, "Enchanting hand-drawn fantasy masterpiece",
             animation=1.0, fantasy=1.0, adventure=1.0, family=1.0,
             tone=0.2, pacing=-0.3, era=0.0, popularity=0.6, intensity=-0.1),
        genres=["animation"], clusters=["anime-animation"],
    ),
    _pair(
        "genre-anime", _G, ["animation", "action", "family", "tone", "intensity"],
        _opt(1429, "tv", "Attack on Titan", 2013, "Brutal dark fantasy anime action",
             animation=1.0, action=1.0, drama=1.0, fantasy=1.0,
             tone=-0.9, pacing=0.8, era=0.5, popularity=0.7, intensity=1.0),
        _opt(8392, "movie", "My Neighbour Totoro", 1988, "Gentle whimsical anime for all ages",
             animation=1.0, family=1.0, fantasy=1.0,
             tone=0.9, pacing=-0.5, era=-0.3, popularity=0.6, intensity=-0.8),
        genres=["animation"], clusters=["anime-animation"],
    ),
    _pair(
        "genre-documentary", _G, ["documentary", "tone", "pacing", "intensity"],
        _opt(69769, "tv", "Planet Earth II", 2016, "Breathtaking nature documentary",
             documentary=1.0,
             tone=0.4, pacing=-0.4, era=0.6, popularity=0.8, intensity=0.1),
        _opt(63247, "tv", "Making a Murderer", 2015, "Gripping true crime documentary",
             documentary=1.0, crime=1.0,
             tone=-0.7, pacing=-0.2, era=0.5, popularity=0.6, intensity=0.5),
        genres=["documentary"], clusters=["true-crime-real-stories"],
    ),
    _pair(
        "genre-horror", _G, ["horror", "comedy", "tone", "intensity", "era"],
        _opt(578, "movie", "Jaws", 1975, "Iconic suspense horror blockbuster",
             horror=1.0, thriller=1.0, adventure=1.0,
             tone=-0.6, pacing=0.4, era=-0.5, popularity=0.9, intensity=0.8),
        _opt(120467, "movie", "The Grand Budapest Hotel", 2014, "Whimsical quirky comedy caper",
             comedy=1.0, drama=1.0, adventure=1.0, crime=1.0,
             tone=0.5, pacing=0.3, era=0.4, popularity=0.5, intensity=-0.3),
        genres=["horror"], clusters=["horror-supernatural"],
    ),
    _pair(
        "genre-comedy-drama", _G, ["drama", "comedy", "tone", "pacing", "intensity"],
        _opt(278, "movie", "The Shawshank Redemption", 1994, "Powerful prison drama about hope",
             drama=1.0, crime=1.0,
             tone=-0.3, pacing=-0.4, era=-0.2, popularity=0.9, intensity=0.5),
        _opt(8363, "movie", "Superbad", 2007, "Raunchy teen comedy mayhem",
             comedy=1.0,
             tone=0.8, pacing=0.6, era=0.3, popularity=0.7, intensity=-0.2),
        genres=["comedy", "drama"], clusters=["feel-good-funny", "heartfelt-drama"],
    ),
    _pair(
        "genre-family", _G, ["family", "animation", "comedy", "tone", "era"],
        _opt(109445, "movie", "Frozen", 2013, "Magical animated musical adventure",
             animation=1.0, family=1.0, musical=1.0, fantasy=1.0, adventure=1.0,
             tone=0.8, pacing=0.3, era=0.5, popularity=0.9, intensity=-0.3),
        _opt(771, "movie", "Home Alone", 1990, "Classic slapstick family comedy",
             comedy=1.0, family=1.0,
             tone=0.9, pacing=0.5, era=-0.3, popularity=0.9, intensity=-0.1),
        genres=["family"],
    ),
    _pair(
        "genre-crime", _G, ["crime", "mystery", "tone", "era", "pacing"],
        _opt(238, "movie", "The Godfather", 1972, "Epic mafia crime saga",
             crime=1.0, drama=1.0,
             tone=-0.8, pacing=-0.5, era=-0.7, popularity=0.9, intensity=0.7),
        _opt(546554, "movie", "Knives Out", 2019, "Witty modern whodunit mystery",
             crime=1.0, mystery=1.0, comedy=1.0, thriller=1.0,
             tone=0.3, pacing=0.4, era=0.8, popularity=0.7, intensity=0.2),
        genres=["crime"], clusters=["dark-thrillers", "true-crime-real-stories"],
    ),
    _pair(
        "genre-war-history", _G, ["war", "history", "drama", "intensity", "pacing"],
        _opt(857, "movie", "Saving Private Ryan", 1998, "Visceral WWII combat epic",
             war=1.0, drama=1.0, action=1.0,
             tone=-0.8, pacing=0.5, era=-0.2, popularity=0.9, intensity=1.0),
        _opt(205596, "movie", "The Imitation Game", 2014, "Cerebral wartime code-breaking drama",
             drama=1.0, history=1.0, war=1.0, thriller=1.0,
             tone=-0.2, pacing=-0.3, era=0.4, popularity=0.7, intensity=-0.1),
        genres=["war", "history"], clusters=["history-war"],
    ),
    _pair(
        "genre-fantasy", _G, ["fantasy", "adventure", "tone", "intensity", "popularity"],
        _opt(120, "movie", "The Lord of the Rings: The Fellowship of the Ring", 2001,
             "Grand epic fantasy quest",
             fantasy=1.0, adventure=1.0, action=1.0, drama=1.0,
             tone=-0.2, pacing=0.3, era=0.0, popularity=0.9, intensity=0.7),
        _opt(671, "movie", "Harry Potter and the Philosopher's Stone", 2001,
             "Magical coming-of-age school adventure",
             fantasy=1.0, adventure=1.0, family=1.0,
             tone=0.5, pacing=0.2, era=0.0, popularity=0.9, intensity=0.1),
        genres=["fantasy"], clusters=["epic-scifi-fantasy"],
    ),
    _pair(
        "genre-musical", _G, ["musical", "drama", "tone", "era", "popularity"],
        _opt(316029, "movie", "The Greatest Showman", 2017, "Uplifting spectacle musical drama",
             musical=1.0, drama=1.0, romance=1.0, family=1.0,
             tone=0.8, pacing=0.5, era=0.7, popularity=0.8, intensity=0.2),
        _opt(1574, "movie", "Chicago", 2002, "Sassy crime-world jazz musical",
             musical=1.0, comedy=1.0, crime=1.0, drama=1.0,
             tone=0.0, pacing=0.4, era=0.0, popularity=0.6, intensity=0.3),
        genres=["musical"], clusters=["rom-coms-love-stories"],
    ),
    _pair(
        "genre-western", _G, ["western", "action", "tone", "intensity", "era"],
        _opt(68718, "movie", "Django Unchained", 2012, "Explosive revisionist western revenge",
             western=1.0, action=1.0, drama=1.0,
             tone=-0.5, pacing=0.5, era=0.4, popularity=0.8, intensity=0.9),
        _opt(44264, "movie", "True Grit", 2010, "Gritty classic-style frontier western",
             western=1.0, adventure=1.0, drama=1.0,
             tone=-0.4, pacing=-0.1, era=0.3, popularity=0.6, intensity=0.4),
        genres=["western"],
    ),
    _pair(
        "genre-reality", _G, ["reality", "tone", "pacing", "intensity"],
        _opt(46261, "tv", "The Great British Bake Off", 2010, "Cosy wholesome baking competition",
             reality=1.0,
             tone=0.9, pacing=-0.2, era=0.4, popularity=0.7, intensity=-0.6),
        _opt(60625, "tv", "RuPaul's Drag Race", 2009, "Fierce glamorous performance competition",
             reality=1.0,
             tone=0.6, pacing=0.4, era=0.4, popularity=0.7, intensity=0.3),
        genres=["reality"], clusters=["reality-entertainment"],
    ),
]

# =============================================================================
# ADAPTIVE POOL
# =============================================================================
ADAPTIVE_POOL: List[QuizPair] = [
    # Tone + intensity probes
    _pair(
        "adaptive-1", _A, ["tone", "intensity", "pacing", "crime", "comedy"],
        _opt(1396, "tv", "Breaking Bad", 2008, "Tense dark crime transformation saga",
             crime=1.0, drama=1.0, thriller=1.0,
             tone=-0.9, pacing=0.4, era=0.3, popularity=0.9, intensity=0.9),
        _opt(1668, "tv", "Friends", 1994, "Classic feel-good sitcom",
             comedy=1.0, romance=1.0,
             tone=0.9, pacing=0.3, era=-0.2, popularity=0.9, intensity=-0.7),
    ),
    _pair(
        "adaptive-2", _A, ["romance", "scifi", "era", "tone"],
        _opt(597, "movie", "Titanic", 1997, "Sweeping romantic disaster epic",
             romance=1.0, drama=1.0,
             tone=-0.1, pacing=0.1, era=-0.3, popularity=0.9, intensity=0.6),
        _opt(603, "movie", "The Matrix", 1999, "Revolutionary sci-fi action classic",
             scifi=1.0, action=1.0,
             tone=-0.5, pacing=0.8, era=-0.2, popularity=0.9, intensity=0.8),
    ),
    _pair(
        "adaptive-3", _A, ["tone", "intensity", "era", "crime", "comedy"],
        _opt(60574, "tv", "Peaky Blinders", 2013, "Stylish period gangster drama",
             crime=1.0, drama=1.0,
             tone=-0.7, pacing=0.3, era=-0.4, popularity=0.7, intensity=0.7),
        _opt(97546, "tv", "Ted Lasso", 2020, "Warm-hearted optimistic sports comedy",
             comedy=1.0, drama=1.0,
             tone=0.9, pacing=0.2, era=0.8, popularity=0.7, intensity=-0.5),
    ),
    _pair(
        "adaptive-4", _A, ["romance", "thriller", "tone", "intensity"],
        _opt(11036, "movie", "The Notebook", 2004, "Sweeping tearjerker love story",
             romance=1.0, drama=1.0,
             tone=0.2, pacing=-0.4, era=0.1, popularity=0.8, intensity=0.2),
        _opt(210577, "movie", "Gone Girl", 2014, "Twisted psychological marriage thriller",
             thriller=1.0, mystery=1.0, drama=1.0,
             tone=-0.9, pacing=0.3, era=0.5, popularity=0.8, intensity=0.8),
    ),
    _pair(
        "adaptive-5", _A, ["animation", "horror", "tone", "family"],
        _opt(862, "movie", "Toy Story", 1995, "Beloved animated family classic",
             animation=1.0, family=1.0, comedy=1.0, adventure=1.0,
             tone=0.8, pacing=0.3, era=-0.2, popularity=0.9, intensity=-0.4),
        _opt(348, "movie", "Alien", 1979, "Claustrophobic sci-fi horror landmark",
             horror=1.0, scifi=1.0, thriller=1.0,
             tone=-0.9, pacing=0.2, era=-0.5, popularity=0.8, intensity=0.9),
    ),
    _pair(
        "adaptive-6", _A, ["intensity", "popularity", "tone", "comedy"],
        _opt(106646, "movie", "The Wolf of Wall Street", 2013, "Excessive dark comedy crime saga",
             comedy=1.0, crime=1.0, drama=1.0,
             tone=-0.2, pacing=0.6, era=0.5, popularity=0.8, intensity=0.7),
        _opt(194, "movie", "Amélie", 2001, "Whimsical romantic French charm",
             comedy=1.0, romance=1.0,
             tone=0.8, pacing=-0.1, era=0.0, popularity=-0.2, intensity=-0.5),
    ),
    _pair(
        "adaptive-7", _A, ["fantasy", "comedy", "tone", "intensity"],
        _opt(1399, "tv", "Game of Thrones", 2011, "Brutal epic fantasy political drama",
             fantasy=1.0, drama=1.0, action=1.0, adventure=1.0,
             tone=-0.8, pacing=0.4, era=0.4, popularity=0.9, intensity=0.9),
        _opt(2316, "tv", "The Office", 2005, "Awkward workplace mockumentary comedy",
             comedy=1.0,
             tone=0.7, pacing=0.1, era=0.2, popularity=0.8, intensity=-0.6),
    ),
    _pair(
        "adaptive-8", _A, ["scifi", "musical", "tone", "pacing"],
        _opt(157336, "movie", "Interstellar", 2014, "Emotional epic space exploration",
             scifi=1.0, drama=1.0, adventure=1.0,
             tone=-0.3, pacing=0.1, era=0.5, popularity=0.9, intensity=0.7),
        _opt(313369, "movie", "La La Land", 2016, "Dreamy romantic musical drama",
             musical=1.0, romance=1.0, drama=1.0, comedy=1.0,
             tone=0.4, pacing=0.0, era=0.7, popularity=0.8, intensity=-0.2),
    ),
    _pair(
        "adaptive-9", _A, ["thriller", "family", "tone", "popularity"],
        _opt(496243, "movie", "Parasite", 2019, "Sharp social thriller dark comedy",
             thriller=1.0, drama=1.0, comedy=1.0,
             tone=-0.6, pacing=0.4, era=0.8, popularity=0.5, intensity=0.7),
        _opt(346648, "movie", "Paddington 2", 2017, "Charming wholesome family adventure",
             family=1.0, comedy=1.0, adventure=1.0, animation=1.0,
             tone=0.9, pacing=0.2, era=0.7, popularity=0.6, intensity=-0.6),
    ),
    _pair(
        "adaptive-10", _A, ["scifi", "reality", "tone", "intensity"],
        _opt(42009, "tv", "Black Mirror", 2011, "Disturbing technology dystopia anthology",
             scifi=1.0, thriller=1.0, drama=1.0,
             tone=-0.9, pacing=0.2, era=0.5, popularity=0.7, intensity=0.8),
        _opt(67136, "tv", "Queer Eye", 2018, "Uplifting feel-good lifestyle makeover",
             reality=1.0,
             tone=0.9, pacing=0.1, era=0.8, popularity=0.6, intensity=-0.6),
    ),
    # Psychological vs action thriller
    _pair(
        "adaptive-11", _A, ["thriller", "action", "pacing", "intensity"],
        _opt(745, "movie", "The Sixth Sense", 1999, "Creepy slow-burn psychological thriller",
             thriller=1.0, mystery=1.0, drama=1.0,
             tone=-0.6, pacing=-0.4, era=-0.2, popularity=0.8, intensity=0.4),
        _opt(245891, "movie", "John Wick", 2014, "Relentless stylish action revenge thriller",
             action=1.0, thriller=1.0, crime=1.0,
             tone=-0.5, pacing=0.9, era=0.5, popularity=0.8, intensity=1.0),
    ),
    # Romcom vs period romance
    _pair(
        "adaptive-12", _A, ["romance", "comedy", "tone", "era", "pacing"],
        _opt(70160, "movie", "Bridesmaids", 2011, "Hilarious raunchy comedy with heart",
             comedy=1.0, romance=1.0,
             tone=0.7, pacing=0.5, era=0.4, popularity=0.7, intensity=-0.1),
        _opt(17473, "movie", "Jane Eyre", 2011, "Atmospheric Gothic period romance",
             romance=1.0, drama=1.0,
             tone=-0.3, pacing=-0.6, era=-0.8, popularity=0.3, intensity=0.1),
    ),
    # Classic vs modern
    _pair(
        "adaptive-13", _A, ["era", "drama", "tone", "popularity"],
        _opt(389, "movie", "12 Angry Men", 1957, "Riveting classic courtroom drama",
             drama=1.0, crime=1.0,
             tone=-0.3, pacing=0.1, era=-0.9, popularity=0.6, intensity=0.3),
        _opt(466420, "movie", "Killers of the Flower Moon", 2023, "Sprawling modern crime epic",
             crime=1.0, drama=1.0, history=1.0, thriller=1.0,
             tone=-0.6, pacing=-0.3, era=0.9, popularity=0.7, intensity=0.5),
    ),
    # Grounded vs epic adventure
    _pair(
        "adaptive-14", _A, ["adventure", "action", "intensity", "popularity"],
        _opt(361743, "movie", "Top Gun: Maverick", 2022, "High-octane blockbuster action spectacle",
             action=1.0, adventure=1.0, drama=1.0,
             tone=0.1, pacing=0.9, era=0.9, popularity=0.9, intensity=0.8),
        _opt(8587, "movie", "The Lion King", 1994, "Beloved animated coming-of-age fable",
             animation=1.0, family=1.0, drama=1.0, adventure=1.0, musical=1.0,
             tone=0.3, pacing=0.2, era=-0.2, popularity=0.9, intensity=0.1),
    ),
    # Melancholic vs slapstick comedy
    _pair(
        "adaptive-15", _A, ["comedy", "tone", "intensity", "pacing"],
        _opt(153, "movie", "Lost in Translation", 2003, "Quiet melancholic comedy-drama",
             comedy=1.0, drama=1.0, romance=1.0,
             tone=-0.1, pacing=-0.7, era=0.1, popularity=0.3, intensity=-0.6),
        _opt(950, "movie", "Ice Age", 2002, "Fun animated slapstick adventure",
             animation=1.0, comedy=1.0, family=1.0, adventure=1.0,
             tone=0.8, pacing=0.4, era=0.0, popularity=0.8, intensity=-0.3),
    ),
    # Prestige slow-burn vs bingeable TV
    _pair(
        "adaptive-16", _A, ["drama", "thriller", "pacing", "intensity", "tone"],
        _opt(44217, "tv", "Vikings", 2013, "Brutal historical action drama",
             drama=1.0, action=1.0, history=1.0, war=1.0, adventure=1.0,
             tone=-0.7, pacing=0.4, era=-0.5, popularity=0.7, intensity=0.8),
        _opt(1418, "tv", "The Big Bang Theory", 2007, "Nerdy lighthearted sitcom",
             comedy=1.0,
             tone=0.7, pacing=0.2, era=0.3, popularity=0.9, intensity=-0.6),
    ),
    # Indie vs mainstream
    _pair(
        "adaptive-17", _A, ["popularity", "tone", "drama", "pacing"],
        _opt(68726, "movie", "Pacific Rim", 2013, "Giant robot blockbuster spectacle",
             action=1.0, scifi=1.0, adventure=1.0,
             tone=0.1, pacing=0.8, era=0.5, popularity=0.8, intensity=0.7),
        _opt(9292, "movie", "In the Mood for Love", 2000, "Exquisite restrained romantic drama",
             romance=1.0, drama=1.0,
             tone=-0.1, pacing=-0.8, era=0.0, popularity=-0.5, intensity=-0.5),
    ),
    # Cosy vs dark mystery
    _pair(
        "adaptive-18", _A, ["mystery", "crime", "tone", "intensity"],
        _opt(37165, "movie", "The Truman Show", 1998, "Thought-provoking satirical comedy-drama",
             comedy=1.0, drama=1.0, scifi=1.0,
             tone=0.1, pacing=0.0, era=-0.2, popularity=0.7, intensity=0.1),
        _opt(680, "movie", "Pulp Fiction", 1994, "Stylish non-linear crime anthology",
             crime=1.0, thriller=1.0, comedy=1.0,
             tone=-0.5, pacing=0.4, era=-0.2, popularity=0.9, intensity=0.7),
    ),
    # Cerebral vs action sci-fi
    _pair(
        "adaptive-19", _A, ["scifi", "action", "pacing", "intensity"],
        _opt(335984, "movie", "Blade Runner 2049", 2017, "Atmospheric philosophical sci-fi noir",
             scifi=1.0, drama=1.0, mystery=1.0, thriller=1.0,
             tone=-0.7, pacing=-0.5, era=0.7, popularity=0.5, intensity=0.3),
        _opt(11, "movie", "Star Wars: A New Hope", 1977, "Iconic space opera adventure",
             scifi=1.0, action=1.0, adventure=1.0, fantasy=1.0,
             tone=0.3, pacing=0.6, era=-0.5, popularity=0.9, intensity=0.5),
    ),
    # Psychological vs slasher horror
    _pair(
        "adaptive-20", _A, ["horror", "thriller", "tone", "pacing"],
        _opt(493922, "movie", "Hereditary", 2018, "Unsettling slow-burn psychological horror",
             horror=1.0, thriller=1.0, mystery=1.0,
             tone=-1.0, pacing=-0.3, era=0.7, popularity=0.4, intensity=0.9),
        _opt(4232, "movie", "Scream", 1996, "Self-aware witty slasher horror",
             horror=1.0, mystery=1.0, thriller=1.0,
             tone=-0.3, pacing=0.6, era=-0.2, popularity=0.8, intensity=0.6),
    ),
    # Limited series vs long-running TV
    _pair(
        "adaptive-21", _A, ["drama", "pacing", "era", "tone"],
        _opt(100088, "tv", "The Last of Us", 2023, "Emotional post-apocalyptic survival drama",
             drama=1.0, action=1.0, scifi=1.0, adventure=1.0,
             tone=-0.7, pacing=0.3, era=0.9, popularity=0.9, intensity=0.8),
        _opt(1405, "tv", "Downton Abbey", 2010, "Elegant British period ensemble drama",
             drama=1.0, romance=1.0, history=1.0,
             tone=0.1, pacing=-0.6, era=-0.5, popularity=0.7, intensity=-0.3),
    ),
    # Nature vs social documentary
    _pair(
        "adaptive-22", _A, ["documentary", "tone", "intensity", "pacing"],
        _opt(84360, "tv", "Our Planet", 2019, "Stunning nature conservation documentary",
             documentary=1.0,
             tone=0.3, pacing=-0.5, era=0.8, popularity=0.7, intensity=0.0),
        _opt(549, "movie", "Bowling for Columbine", 2002, "Provocative social issue documentary",
             documentary=1.0,
             tone=-0.6, pacing=0.1, era=0.0, popularity=0.4, intensity=0.5),
    ),
    # Drama and action balance
    _pair(
        "adaptive-23", _A, ["action", "drama", "pacing", "tone", "intensity"],
        _opt(550, "movie", "Fight Club", 1999, "Anarchic twist-driven psychological thriller",
             drama=1.0, thriller=1.0,
             tone=-0.8, pacing=0.5, era=-0.2, popularity=0.8, intensity=0.8),
        _opt(508442, "movie", "Soul", 2020, "Existential animated musical journey",
             animation=1.0, family=1.0, comedy=1.0, fantasy=1.0, musical=1.0,
             tone=0.6, pacing=-0.1, era=0.8, popularity=0.7, intensity=-0.3),
    ),
    # International probe
    _pair(
        "adaptive-24", _A, ["thriller", "drama", "tone", "popularity", "intensity"],
        _opt(93405, "tv", "Squid Game", 2021, "Brutal survival thriller sensation",
             thriller=1.0, drama=1.0, action=1.0, mystery=1.0,
             tone=-0.8, pacing=0.7, era=0.8, popularity=0.9, intensity=1.0),
        _opt(72879, "tv", "Schitt's Creek", 2015, "Heartwarming quirky family comedy",
             comedy=1.0,
             tone=0.8, pacing=0.1, era=0.6, popularity=0.5, intensity=-0.6),
    ),
    # Heist vs detective
    _pair(
        "adaptive-25", _A, ["crime", "mystery", "pacing", "tone"],
        _opt(161, "movie", "Ocean's Eleven", 2001, "Slick stylish ensemble heist caper",
             crime=1.0, thriller=1.0, comedy=1.0,
             tone=0.4, pacing=0.6, era=0.0, popularity=0.8, intensity=0.2),
        _opt(194662, "movie", "Zodiac", 2007, "Obsessive methodical serial killer investigation",
             crime=1.0, mystery=1.0, thriller=1.0, drama=1.0,
             tone=-0.7, pacing=-0.4, era=0.2, popularity=0.5, intensity=0.5),
    ),
]


def all_pairs() -> List[QuizPair]:
    """Every pair across all three pools, fixed first."""
    return FIXED_PAIRS + GENRE_RESPONSIVE_POOL + ADAPTIVE_POOL


_PAIRS_BY_ID = {pair.id: pair for pair in all_pairs()}

if len(_PAIRS_BY_ID) != len(all_pairs()):
    raise ValueError("Duplicate quiz pair id in catalog")


def get_pair(pair_id: str) -> Optional[QuizPair]:
    return _PAIRS_BY_ID.get(pair_id)


def pairs_by_id(pairs: Optional[List[QuizPair]] = None) -> Dict[str, QuizPair]:
    """Lookup table for scoring; defaults to the built-in pools."""
    if pairs is None:
        return dict(_PAIRS_BY_ID)
    return {pair.id: pair for pair in pairs}
