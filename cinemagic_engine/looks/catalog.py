"""Look catalog for Cinemagic."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from ..errors import InvalidLook


class LookId(str, Enum):
    SCI_FI_NEON = "SCI_FI_NEON"
    DESERT_EPIC = "DESERT_EPIC"
    SPACE_OPERA = "SPACE_OPERA"
    DYSTOPIAN_MATRIX = "DYSTOPIAN_MATRIX"
    POST_APOCALYPTIC = "POST_APOCALYPTIC"
    CUSTOM_GRADIENT = "CUSTOM_GRADIENT"


REFERENCE_LOOK_ID = LookId.CUSTOM_GRADIENT
DEFAULT_LOOK_ID = LookId.SCI_FI_NEON


@dataclass(frozen=True)
class LookDefinition:
    look_id: LookId
    name: str
    name_es: str
    description: str
    description_es: str
    prompt_modifier: str
    color_from: str = ""
    color_to: str = ""

    @property
    def is_reference(self) -> bool:
        return self.look_id is REFERENCE_LOOK_ID

    def display_name(self, language: str = "en") -> str:
        return self.name_es if _is_spanish(language) else self.name

    def display_description(self, language: str = "en") -> str:
        return self.description_es if _is_spanish(language) else self.description


_LOOKS: tuple[LookDefinition, ...] = (
    LookDefinition(
        look_id=LookId.SCI_FI_NEON,
        name="Neon Noir",
        name_es="Neón Noir",
        description=(
            "Tech-Noir aesthetic. Emulates Kodak Vision3 500T film stock with high contrast, "
            "anamorphic lens flares, and wet-street reflections. Cyan/Magenta split toning."
        ),
        description_es=(
            "Estética Tech-Noir. Emula película Kodak Vision3 500T con alto contraste, "
            "destellos anamórficos y reflejos en calles mojadas. Tonos Cian/Magenta."
        ),
        prompt_modifier=(
            "cinematic lighting, neon noir style, cyberpunk aesthetic, rainy night, vibrant neon "
            "blue and pink lights, wet surfaces reflecting light, dramatic shadows, high contrast, "
            "8k resolution, ARRI Alexa Mini LF, Cooke Anamorphic /i lenses, ISO 800 grain structure."
        ),
        color_from="from-blue-600",
        color_to="to-purple-600",
    ),
    LookDefinition(
        look_id=LookId.DESERT_EPIC,
        name="Dune Sands",
        name_es="Arenas de Duna",
        description=(
            "Large format epic. Features desaturated bleach bypass look, warm golden hour "
            "highlights, and atmospheric volumetric dust. Mimics ARRI Rental Alfie lenses."
        ),
        description_es=(
            'Épica de gran formato. Aspecto desaturado "bleach bypass", luces cálidas de hora '
            "dorada y polvo volumétrico atmosférico. Lentes ARRI Rental Alfie."
        ),
        prompt_modifier=(
            "epic wide shot, desert planet aesthetic, golden hour lighting, floating dust particles, "
            "vast scale, muted earth tones, cinematic composition, Denis Villeneuve style, IMAX "
            "quality, sharp details, warm color temperature 5600K, low saturation shadows."
        ),
        color_from="from-orange-500",
        color_to="to-yellow-600",
    ),
    LookDefinition(
        look_id=LookId.SPACE_OPERA,
        name="Interstellar",
        name_es="Interestelar",
        description=(
            "Deep space realism. Pure black levels (0 IRE), harsh point-source lighting, and 65mm "
            "IMAX film resolution. Cold, clinical color temperature."
        ),
        description_es=(
            "Realismo de espacio profundo. Niveles de negro puro (0 IRE), iluminación dura de punto "
            "único y resolución IMAX de 65mm. Temperatura fría y clínica."
        ),
        prompt_modifier=(
            "outer space backdrop, realistic sci-fi technology, deep blacks, bright stark starlight, "
            "lens flares, anamorphic lens format, Christopher Nolan style, photorealistic, 8k, highly "
            "detailed textures, hard lighting, high dynamic range."
        ),
        color_from="from-slate-800",
        color_to="to-indigo-900",
    ),
    LookDefinition(
        look_id=LookId.DYSTOPIAN_MATRIX,
        name="System Code",
        name_es="Código Sistema",
        description=(
            "Cyber-industrial. Heavy green tint in mid-tones, crushed blacks, and digital noise "
            "artifacts. 360-degree shutter angle look."
        ),
        description_es=(
            "Ciber-industrial. Fuerte tinte verde en medios tonos, negros empastados y artefactos "
            "digitales. Aspecto de obturador de 360 grados."
        ),
        prompt_modifier=(
            "Matrix aesthetic, green color grading, digital rain atmosphere, gritty urban environment, "
            "sleek black leather textures, sharp focus, 35mm film grain, Wachowski style, action movie "
            "lighting, fluorescent green bias, high contrast monochrome with tint."
        ),
        color_from="from-green-700",
        color_to="to-emerald-900",
    ),
    LookDefinition(
        look_id=LookId.POST_APOCALYPTIC,
        name="Wasteland",
        name_es="Tierra Baldía",
        description=(
            'High-octane action. "Blockbuster" Orange & Teal separation. High saturation, high '
            "shutter speed look, gritty texture overlay."
        ),
        description_es=(
            'Acción de alto octanaje. Separación "Blockbuster" Naranja y Turquesa. Alta saturación, '
            "aspecto de obturación rápida y texturas rugosas."
        ),
        prompt_modifier=(
            "Mad Max Fury Road style, high saturation, rusty metal, orange and teal color grading, "
            "rugged textures, intense sunlight, desert wasteland, chaotic energy, dynamic angle, "
            "award-winning cinematography, overexposed highlights."
        ),
        color_from="from-red-700",
        color_to="to-orange-800",
    ),
    LookDefinition(
        look_id=LookId.CUSTOM_GRADIENT,
        name="Reference Match",
        name_es="Referencia",
        description=(
            "Upload a reference image (grade, gradient, or still). The AI will analyze the histogram "
            "and apply that specific color palette to your image."
        ),
        description_es=(
            "Sube una imagen de referencia (gradiente o fotograma). La IA analizará y aplicará esa "
            "paleta de colores específica a tu imagen."
        ),
        prompt_modifier=(
            "Match the color grading, lighting temperature, and mood of the provided reference image "
            "perfectly. Apply the reference color palette to the scene."
        ),
        color_from="from-gray-700",
        color_to="to-gray-900",
    ),
)

_BY_ID: dict[LookId, LookDefinition] = {look.look_id: look for look in _LOOKS}


def get_look(look_id: LookId | str) -> LookDefinition:
    key = _coerce_look_id(look_id)
    look = _BY_ID.get(key) if key is not None else None
    if look is None:
        raise InvalidLook(f"Unknown look id: {look_id!r}")
    return look


def list_looks() -> list[LookDefinition]:
    return list(_LOOKS)


def concrete_looks() -> Iterable[LookDefinition]:
    return (look for look in _LOOKS if not look.is_reference)


def look_slug(look: LookDefinition | None) -> str:
    if look is None:
        return "cinematic"
    return re.sub(r"\s", "-", look.name.lower())


def _coerce_look_id(value: LookId | str) -> LookId | None:
    if isinstance(value, LookId):
        return value
    try:
        return LookId(str(value))
    except ValueError:
        return None


def _is_spanish(language: str | None) -> bool:
    return str(language or "").strip().lower().startswith("es")
