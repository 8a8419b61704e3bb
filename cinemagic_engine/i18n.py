"""User-facing messages in English and Spanish."""

from __future__ import annotations

MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "enhance_error": "Please fill in at least one field above to use AI enhancement.",
        "error_reference": "Please upload a reference image for the Custom Reference filter.",
        "error_generate": "Failed to generate image. Please try again or check your API key.",
        "error_enhance": "Failed to enhance prompt.",
        "chat_greeting": (
            "Hello! I am CineBot. Ask me anything about cinematography or how to get the best results."
        ),
        "chat_apology": "Sorry, connection error.",
    },
    "es": {
        "enhance_error": "Por favor rellena al menos un campo arriba para usar la mejora IA.",
        "error_reference": "Por favor sube una imagen de referencia para el filtro personalizado.",
        "error_generate": "Error al generar la imagen. Inténtalo de nuevo o verifica tu API key.",
        "error_enhance": "Error al mejorar el prompt.",
        "chat_greeting": (
            "¡Hola! Soy CineBot. Pregúntame sobre cinematografía o cómo obtener los mejores resultados."
        ),
        "chat_apology": "Lo siento, error de conexión.",
    },
}


def message(key: str, language: str = "en") -> str:
    table = MESSAGES["es"] if str(language or "").lower().startswith("es") else MESSAGES["en"]
    return table[key]
