from __future__ import annotations

from typing import Dict, Optional

# TMDB movie genre ids
TMDB_GENRES: Dict[int, str] = {
    28: "Action",
    12: "Adventure",
    16: "Animation",
    35: "Comedy",
    80: "Crime",
    99: "Documentary",
    18: "Drama",
    10751: "Family",
    14: "Fantasy",
    36: "History",
    27: "Horror",
    10402: "Music",
    9648: "Mystery",
    10749: "Romance",
    878: "Science Fiction",
    10770: "TV Movie",
    53: "Thriller",
    10752: "War",
    37: "Western",
}

# Map user utterances -> genre id
_GENRE_SYNONYMS: Dict[str, int] = {
    name.lower(): code for code, name in TMDB_GENRES.items()
}
_GENRE_SYNONYMS.update(
    {
        "animated": 16,
        "anime": 16,
        "cartoon": 16,
        "comedies": 35,
        "funny": 35,
        "documentaries": 99,
        "doc": 99,
        "docs": 99,
        "dramas": 18,
        "kids": 10751,
        "historical": 36,
        "period": 36,
        "scary": 27,
        "musical": 10402,
        "musicals": 10402,
        "mysteries": 9648,
        "romantic": 10749,
        "romcom": 10749,
        "science": 878,
        "sci": 878,
        "scifi": 878,
        "sci-fi": 878,
        "thrillers": 53,
        "suspense": 53,
        "westerns": 37,
    }
)

# Country names users type -> ISO 3166-1 codes TMDB expects
COUNTRY_CODES: Dict[str, str] = {
    "america": "US",
    "the us": "US",
    "the usa": "US",
    "usa": "US",
    "united states": "US",
    "the united states": "US",
    "britain": "GB",
    "england": "GB",
    "the uk": "GB",
    "uk": "GB",
    "united kingdom": "GB",
    "the united kingdom": "GB",
    "france": "FR",
    "germany": "DE",
    "italy": "IT",
    "spain": "ES",
    "mexico": "MX",
    "brazil": "BR",
    "argentina": "AR",
    "japan": "JP",
    "korea": "KR",
    "south korea": "KR",
    "china": "CN",
    "hong kong": "HK",
    "taiwan": "TW",
    "india": "IN",
    "iran": "IR",
    "israel": "IL",
    "sweden": "SE",
    "denmark": "DK",
    "norway": "NO",
    "ireland": "IE",
    "canada": "CA",
    "australia": "AU",
    "new zealand": "NZ",
    "nigeria": "NG",
}


def lookup_genre(word: str | None) -> Optional[int]:
    """Resolve a single user-typed word to a TMDB genre id."""
    if not word:
        return None
    key = word.strip().lower()
    if not key:
        return None
    if key in _GENRE_SYNONYMS:
        return _GENRE_SYNONYMS[key]
    if key.endswith("s") and key[:-1] in _GENRE_SYNONYMS:
        return _GENRE_SYNONYMS[key[:-1]]
    return None


def resolve_country(phrase: str | None) -> Optional[str]:
    if not phrase:
        return None
    words = phrase.strip().lower().split()
    # "south korea please" -> try the longest leading run of words first
    for size in range(len(words), 0, -1):
        candidate = " ".join(words[:size])
        if candidate in COUNTRY_CODES:
            return COUNTRY_CODES[candidate]
    if len(words) == 1 and len(words[0]) == 2 and words[0].isalpha():
        return words[0].upper()
    return None
