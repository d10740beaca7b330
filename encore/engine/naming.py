"""Display-name generation for songs, artists, albums and tours."""

from __future__ import annotations

import random

from encore.data.names import (
    ADJECTIVES,
    ALBUM_NOUNS,
    ARTIST_NOUNS,
    ARTIST_PREFIXES,
    GENRE_WORDS,
    NOUNS,
    TOUR_ADJECTIVES,
)


def generate_song_name(genre: str | None = None, rng: random.Random | None = None) -> str:
    r = rng or random
    words = GENRE_WORDS.get(genre or "", ())
    if words and r.random() < 0.5:
        return f"{r.choice(words)} {r.choice(NOUNS)}"
    return f"{r.choice(ADJECTIVES)} {r.choice(NOUNS)}"


def generate_artist_name(rng: random.Random | None = None) -> str:
    r = rng or random
    return f"{r.choice(ARTIST_PREFIXES)} {r.choice(ARTIST_NOUNS)}"


def generate_album_name(rng: random.Random | None = None) -> str:
    r = rng or random
    return f"{r.choice(ADJECTIVES)} {r.choice(ALBUM_NOUNS)}"


def generate_tour_name(artist_name: str, rng: random.Random | None = None) -> str:
    r = rng or random
    return f"{artist_name}: The {r.choice(TOUR_ADJECTIVES)} Tour"
