"""
Prompt construction for mood illustrations.

Maps keywords found in a journal note to a scene for a cartoon cat or dog.
The keyword table is ordered: the first category with a hit wins, even if a
later category matches more words.
"""
import random
import re
from typing import Optional

ANIMALS = ("cat", "dog")

# Keywords match at the start of a word, so "sad" hits "sadness" but not "pasado".
KEYWORD_CATEGORIES = (
    ("work", ("trabajo", "oficina", "productivo", "reunión", "reunion", "job", "office", "meeting", "deadline")),
    ("fatigue", ("cansado", "cansada", "sueño", "dormir", "agotado", "agotada", "tired", "sleepy", "exhausted")),
    ("happiness", ("feliz", "alegre", "contento", "contenta", "happy", "joyful", "excited")),
    ("sadness", ("triste", "llorar", "desanimado", "desanimada", "sad", "lonely", "crying")),
    ("food", ("comida", "cena", "almuerzo", "desayuno", "pizza", "food", "dinner", "lunch", "breakfast")),
    ("exercise", ("ejercicio", "gym", "gimnasio", "correr", "deporte", "entrenar", "exercise", "workout", "training", "running")),
    ("family", ("familia", "mamá", "papá", "hermano", "hermana", "family", "mother", "father")),
    ("friends", ("amigos", "amigas", "amigo", "amiga", "fiesta", "personas", "friends", "party")),
    ("rain", ("lluvia", "lloviendo", "mal tiempo", "tormenta", "rain", "storm")),
    ("sun", ("soleado", "playa", "calor", "verano", "sunny", "sunshine", "beach")),
)

CATEGORY_CONTEXTS = {
    "work": "The {animal} sits at a messy office desk with a laptop, stacks of papers and a giant cup of coffee.",
    "fatigue": "The {animal} is yawning with dark circles under its eyes, or fast asleep in a funny position on a keyboard.",
    "happiness": "The {animal} is jumping with joy under a shower of confetti and balloons.",
    "sadness": "The {animal} is wrapped in a cozy blanket holding a cup of tea, with a tiny rain cloud above its head.",
    "food": "The {animal} is eating or surrounded by delicious food, looking extremely satisfied.",
    "exercise": "The {animal} is working out in sporty clothes with a headband, running or lifting tiny dumbbells.",
    "family": "The {animal} is hugging its family of other little animals in a warm, cozy living room.",
    "friends": "The {animal} is surrounded by animal friends in a fun social situation, laughing together.",
    "rain": "The {animal} is under the rain holding an umbrella, staying adorable despite the weather.",
    "sun": "The {animal} is relaxing in the sunshine with sunglasses and a cold drink.",
}

MOOD_CONTEXTS = {
    "happy": "The {animal} is playing happily in a bright, colorful place with a big smile.",
    "neutral": "The {animal} is calmly reading a book in a hammock with a cup of tea.",
    "sad": "The {animal} is sitting by a window on a gray day, a little sad but very tender.",
}

MOOD_EXPRESSIONS = {
    "happy": "very happy and playful, with a big smile",
    "neutral": "calm and serene, with a relaxed expression",
    "sad": "a little sad but very sweet, with big expressive eyes",
}

STYLE_SUFFIX = (
    "Style: colorful digital illustration, cute cartoon, vibrant colors, "
    "high resolution, funny and heartwarming."
)

_CATEGORY_PATTERNS = tuple(
    (category, re.compile(r"\b(?:" + "|".join(re.escape(keyword) for keyword in keywords) + ")"))
    for category, keywords in KEYWORD_CATEGORIES
)

_default_rng = random.Random()


def match_category(note: str) -> Optional[str]:
    """Return the first category in table order with a keyword in the note."""
    note_lower = note.lower()
    for category, pattern in _CATEGORY_PATTERNS:
        if pattern.search(note_lower):
            return category
    return None


def build_prompt(note: str, mood_type: str, rng: Optional[random.Random] = None) -> str:
    """
    Build an image generation prompt for a note and mood.

    The animal is chosen once per call from ``rng``; pass a seeded
    ``random.Random`` for reproducible prompts.
    """
    animal = (rng or _default_rng).choice(ANIMALS)

    category = match_category(note)
    if category is not None:
        context = CATEGORY_CONTEXTS[category]
    else:
        context = MOOD_CONTEXTS.get(mood_type, MOOD_CONTEXTS["neutral"])

    expression = MOOD_EXPRESSIONS.get(mood_type, "adorable")

    return (
        f"Create an adorable and comical illustration of a {animal} who looks {expression}. "
        f"{context.format(animal=animal)} "
        f"{STYLE_SUFFIX} "
        f"Inspired by this journal note: \"{note}\""
    )
