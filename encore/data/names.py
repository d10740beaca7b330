"""Word lists for display names (songs, artists, albums, tours)."""

from __future__ import annotations

ADJECTIVES: tuple[str, ...] = (
    "Electric", "Midnight", "Golden", "Broken", "Neon", "Velvet", "Hollow",
    "Endless", "Silent", "Burning", "Digital", "Crimson", "Fading", "Wild",
)

NOUNS: tuple[str, ...] = (
    "Heart", "Signal", "Dream", "Highway", "Echo", "Satellite", "Summer",
    "Mirror", "Skyline", "Rain", "Machine", "Frequency", "Horizon", "Static",
)

ARTIST_PREFIXES: tuple[str, ...] = (
    "DJ", "MC", "Lil", "Young", "Big", "The", "Saint", "Baby",
)

ARTIST_NOUNS: tuple[str, ...] = (
    "Algorithm", "Pixel", "Cipher", "Vector", "Tensor", "Prompt", "Render",
    "Kernel", "Token", "Gradient", "Sample", "Loop",
)

ALBUM_NOUNS: tuple[str, ...] = (
    "Sessions", "Chronicles", "Collection", "Anthology", "Tapes", "Archives",
    "Sides", "Diaries",
)

TOUR_ADJECTIVES: tuple[str, ...] = (
    "World", "Farewell", "Reunion", "Stadium", "Comeback", "Global", "Victory",
)

# Genre-flavoured words mixed into song titles
GENRE_WORDS: dict[str, tuple[str, ...]] = {
    "pop": ("Love", "Party", "Tonight", "Forever"),
    "hip-hop": ("Hustle", "Crown", "Block", "Flex"),
    "rock": ("Thunder", "Rebel", "Fire", "Stone"),
    "electronic": ("Pulse", "Circuit", "Bass", "Laser"),
    "country": ("Dirt Road", "Whiskey", "Porch", "Pickup"),
    "jazz": ("Blue", "Swing", "Smoke", "Moonlight"),
    "classical": ("Sonata", "Nocturne", "Overture", "Requiem"),
    "indie": ("Polaroid", "Bedroom", "Cassette", "Bicycle"),
}
