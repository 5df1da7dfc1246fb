"""
Encouraging messages shown after a mood is saved.
"""
import random
from typing import Optional, Tuple

MOOD_MESSAGES = {
    "happy": [
        "¡Qué genial que te sientas feliz! 😊",
        "¡Me alegra saber que estás de buen humor! 🌟",
        "¡Qué bueno que tengas un día alegre! ✨",
        "¡Tu felicidad es contagiosa! 🎉",
    ],
    "neutral": [
        "Es perfectamente normal sentirse neutral. 😌",
        "Los días tranquilos también son valiosos. 🌸",
        "A veces necesitamos estos momentos de calma. 🕊️",
        "Tu equilibrio emocional es admirable. ⚖️",
    ],
    "sad": [
        "Es valiente que compartas cómo te sientes. 💙",
        "Los días difíciles también pasan. 🌈",
        "Reconocer tus emociones es el primer paso. 🤗",
        "Está bien no estar bien a veces. 💜",
    ],
}

NOTE_MESSAGES = {
    "happy": [
        "Gracias por compartir tu alegría con nosotros.",
        "Es hermoso ver cómo disfrutas los pequeños momentos.",
        "Tu positividad ilumina el día de todos.",
        "Que sigas teniendo muchos momentos así.",
    ],
    "neutral": [
        "Gracias por ser honesto sobre cómo te sientes.",
        "Cada día es una oportunidad de crecimiento.",
        "Tu autenticidad es muy valiosa.",
        "Es importante escuchar todas nuestras emociones.",
    ],
    "sad": [
        "Gracias por confiar en nosotros con tus sentimientos.",
        "Recuerda que no estás solo en esto.",
        "Es valiente expresar lo que sientes.",
        "Cada día es una nueva oportunidad.",
    ],
}


def encouragement_for(mood_type: str, rng: Optional[random.Random] = None) -> Tuple[str, str]:
    """Pick a (mood message, note message) pair for a mood label."""
    rng = rng or random
    return rng.choice(MOOD_MESSAGES[mood_type]), rng.choice(NOTE_MESSAGES[mood_type])
