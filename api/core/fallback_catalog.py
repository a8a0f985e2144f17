"""Static movie tables served when TMDB can't be reached."""

from __future__ import annotations

from typing import Any, Dict, List

FALLBACK_MOVIES: Dict[str, List[Dict[str, Any]]] = {
    "stressed": [
        {
            "id": 1,
            "title": "Spirited Away",
            "overview": "A masterpiece of visual storytelling that transports you completely into another world, asking nothing but your wonder.",
            "poster_path": "/spirited-away.jpg",
            "release_date": "2001-07-20",
            "vote_average": 8.5,
            "genre_ids": [16, 10751, 14],
        },
        {
            "id": 2,
            "title": "The Grand Budapest Hotel",
            "overview": "Wes Anderson's most delightful confection, a visual feast that's both melancholic and joyous, like a perfect macaron.",
            "poster_path": "/grand-budapest.jpg",
            "release_date": "2014-03-07",
            "vote_average": 8.1,
            "genre_ids": [35, 18],
        },
        {
            "id": 3,
            "title": "Paddington 2",
            "overview": "Pure, concentrated joy. A film so genuinely good-hearted it could cure cynicism.",
            "poster_path": "/paddington2.jpg",
            "release_date": "2017-11-10",
            "vote_average": 7.8,
            "genre_ids": [10751, 35, 12],
        },
    ],
    "sad": [
        {
            "id": 4,
            "title": "About Time",
            "overview": "A film about love, loss, and the preciousness of ordinary moments that manages to be both heartbreaking and uplifting.",
            "poster_path": "/about-time.jpg",
            "release_date": "2013-11-01",
            "vote_average": 7.8,
            "genre_ids": [35, 18, 14],
        },
        {
            "id": 5,
            "title": "Inside Out",
            "overview": "Pixar's masterpiece about emotions that validates every feeling while teaching us that sadness has its place in joy.",
            "poster_path": "/inside-out.jpg",
            "release_date": "2015-06-19",
            "vote_average": 8.1,
            "genre_ids": [16, 10751, 18],
        },
        {
            "id": 6,
            "title": "Her",
            "overview": "A tender exploration of love and loneliness in the modern age that finds beauty in melancholy.",
            "poster_path": "/her.jpg",
            "release_date": "2013-12-18",
            "vote_average": 8.0,
            "genre_ids": [18, 10749, 878],
        },
    ],
    "adventurous": [
        {
            "id": 7,
            "title": "Mad Max: Fury Road",
            "overview": "A relentless chase that never lets up. Pure cinema at its most visceral and exhilarating.",
            "poster_path": "/mad-max-fury-road.jpg",
            "release_date": "2015-05-15",
            "vote_average": 8.1,
            "genre_ids": [28, 12, 878],
        },
        {
            "id": 8,
            "title": "The Princess Bride",
            "overview": "Adventure, romance, comedy, and heart: everything you want in a perfect adventure story.",
            "poster_path": "/princess-bride.jpg",
            "release_date": "1987-09-25",
            "vote_average": 8.0,
            "genre_ids": [12, 10751, 14],
        },
        {
            "id": 9,
            "title": "Spider-Man: Into the Spider-Verse",
            "overview": "A visual revolution that matches its energy with heart. Superhero storytelling at its finest.",
            "poster_path": "/spider-verse.jpg",
            "release_date": "2018-12-14",
            "vote_average": 8.4,
            "genre_ids": [16, 28, 12],
        },
    ],
    "thoughtful": [
        {
            "id": 10,
            "title": "Arrival",
            "overview": "Science fiction that explores language, time, and what it means to be human with breathtaking intelligence.",
            "poster_path": "/arrival.jpg",
            "release_date": "2016-11-11",
            "vote_average": 7.9,
            "genre_ids": [18, 878],
        },
        {
            "id": 11,
            "title": "Parasite",
            "overview": "A masterclass in filmmaking that unpacks class, family, and society with surgical precision and dark humor.",
            "poster_path": "/parasite.jpg",
            "release_date": "2019-05-30",
            "vote_average": 8.5,
            "genre_ids": [35, 18, 53],
        },
        {
            "id": 12,
            "title": "Moonlight",
            "overview": "A triptych of identity, sexuality, and masculinity told with poetry and profound empathy.",
            "poster_path": "/moonlight.jpg",
            "release_date": "2016-10-21",
            "vote_average": 7.4,
            "genre_ids": [18],
        },
    ],
    "romantic": [
        {
            "id": 13,
            "title": "Before Sunrise",
            "overview": "Two strangers, one night in Vienna, and conversations that feel like falling in love.",
            "poster_path": "/before-sunrise.jpg",
            "release_date": "1995-01-27",
            "vote_average": 8.1,
            "genre_ids": [18, 10749],
        },
        {
            "id": 14,
            "title": "The Princess Bride",
            "overview": "True love, adventure, and perfect quotable dialogue. Romance with wit and sword fights.",
            "poster_path": "/princess-bride.jpg",
            "release_date": "1987-09-25",
            "vote_average": 8.0,
            "genre_ids": [12, 10751, 14, 10749],
        },
        {
            "id": 15,
            "title": "Eternal Sunshine of the Spotless Mind",
            "overview": "A unique exploration of love's complexity, both the pain and beauty of romantic memory.",
            "poster_path": "/eternal-sunshine.jpg",
            "release_date": "2004-03-19",
            "vote_average": 8.3,
            "genre_ids": [18, 10749, 878],
        },
    ],
    "nostalgic": [
        {
            "id": 16,
            "title": "Stand By Me",
            "overview": "The perfect coming-of-age story about friendship, growing up, and the summer that changes everything.",
            "poster_path": "/stand-by-me.jpg",
            "release_date": "1986-08-22",
            "vote_average": 8.1,
            "genre_ids": [18, 12],
        },
        {
            "id": 17,
            "title": "The Sandlot",
            "overview": "Summer, baseball, and the kind of childhood friendships that feel like they'll last forever.",
            "poster_path": "/sandlot.jpg",
            "release_date": "1993-04-07",
            "vote_average": 7.8,
            "genre_ids": [35, 10751, 18],
        },
        {
            "id": 18,
            "title": "Cinema Paradiso",
            "overview": "A love letter to movies and the magic of childhood, told with Italian warmth and wisdom.",
            "poster_path": "/cinema-paradiso.jpg",
            "release_date": "1988-11-17",
            "vote_average": 8.5,
            "genre_ids": [18, 10749],
        },
    ],
    "general": [
        {
            "id": 19,
            "title": "Back to the Future",
            "overview": "A time-travelling joyride with a perfect script, ideal for any crowd and any mood.",
            "poster_path": "/back-to-the-future.jpg",
            "release_date": "1985-07-03",
            "vote_average": 8.3,
            "genre_ids": [12, 35, 878],
        },
        {
            "id": 20,
            "title": "Toy Story",
            "overview": "The film that launched a medium, as funny and warm today as the day it arrived.",
            "poster_path": "/toy-story.jpg",
            "release_date": "1995-10-30",
            "vote_average": 8.0,
            "genre_ids": [16, 12, 10751, 35],
        },
        {
            "id": 21,
            "title": "The Intouchables",
            "overview": "An unlikely friendship rendered with so much humor and warmth it's impossible not to smile.",
            "poster_path": "/intouchables.jpg",
            "release_date": "2011-11-02",
            "vote_average": 8.3,
            "genre_ids": [18, 35],
        },
    ],
}

# Emotions without a table of their own borrow a close neighbour's.
FALLBACK_ALIASES: Dict[str, str] = {
    "anxious": "stressed",
    "tired": "stressed",
    "heartbroken": "sad",
    "melancholy": "sad",
    "lonely": "sad",
    "energetic": "adventurous",
    "restless": "adventurous",
    "bored": "adventurous",
    "contemplative": "thoughtful",
    "confused": "thoughtful",
    "unmotivated": "thoughtful",
}

EMERGENCY_MOVIES: List[Dict[str, Any]] = [
    {
        "id": 999,
        "title": "The Shawshank Redemption",
        "overview": "Hope is a good thing, maybe the best of things, and no good thing ever dies.",
        "poster_path": "/shawshank.jpg",
        "release_date": "1994-09-23",
        "vote_average": 9.3,
        "genre_ids": [18],
        "runtime": 142,
        "aiContext": "A timeless story that reminds us why we love movies in the first place",
    },
    {
        "id": 998,
        "title": "Spirited Away",
        "overview": "A magical journey that works for any mood, any time, any viewer.",
        "poster_path": "/spirited-away.jpg",
        "release_date": "2001-07-20",
        "vote_average": 8.5,
        "genre_ids": [16, 10751, 14],
        "runtime": 125,
        "aiContext": "Pure cinematic magic that transcends age, culture, and mood",
    },
    {
        "id": 997,
        "title": "Goodfellas",
        "overview": "As far back as I can remember, I always wanted to watch a great movie.",
        "poster_path": "/goodfellas.jpg",
        "release_date": "1990-09-21",
        "vote_average": 8.7,
        "genre_ids": [18, 80],
        "runtime": 146,
        "aiContext": "Scorsese's masterpiece that never gets old, no matter how many times you've seen it",
    },
]

EMERGENCY_EXPLANATION = (
    "I'm having trouble accessing my full recommendation engine, but here are "
    "some universally loved films that might suit your mood."
)
EMERGENCY_NOTE = (
    "Even when technology fails us, great cinema endures. These selections are "
    "timeless for a reason."
)


def fallback_movies_for(emotion: str) -> List[Dict[str, Any]]:
    key = FALLBACK_ALIASES.get(emotion, emotion)
    return FALLBACK_MOVIES.get(key, FALLBACK_MOVIES["general"])
