from __future__ import annotations

import random
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from catalog import (
    APERTURE_RANGE,
    APERTURE_STOPS,
    CATEGORIES,
    DEFAULT_APERTURE,
    DEFAULT_EXPOSURE,
    DEFAULT_SHUTTER_SPEED,
    DEFAULTS,
    EXPOSURE_STEPS,
    NONE_OPTION_ID,
    find_option,
)
from prompts_lib import (
    default_negative_prompt,
    midjourney_suffix,
    stable_diffusion_suffix,
    subject_fallback,
    technical_quality,
)

PromptMode = Literal["technical", "creative", "both"]

# Clauses each mode leaves out.
_MODE_EXCLUDES: dict[str, frozenset[str]] = {
    "both": frozenset(),
    "creative": frozenset({"gear", "filter", "exposure"}),
    "technical": frozenset({"composition", "lighting", "film", "atmosphere"}),
}

# Categories shuffled by randomize_selection; engine, aspect ratio and quality stay put.
_RANDOMIZED_CATEGORIES = (
    "body",
    "lens",
    "lighting_style",
    "lighting_type",
    "shot_size",
    "film_stock",
    "lens_filter",
    "palette",
    "weather",
    "period",
)


class SelectionState(BaseModel):
    model_config = ConfigDict(frozen=True)

    body: str = DEFAULTS["body"]
    lens: str = DEFAULTS["lens"]
    lighting_style: str = DEFAULTS["lighting_style"]
    lighting_type: str = DEFAULTS["lighting_type"]
    shot_size: str = DEFAULTS["shot_size"]
    film_stock: str = DEFAULTS["film_stock"]
    lens_filter: str = DEFAULTS["lens_filter"]
    palette: str = DEFAULTS["palette"]
    weather: str = DEFAULTS["weather"]
    period: str = DEFAULTS["period"]
    engine: str = DEFAULTS["engine"]
    aspect_ratio: str = DEFAULTS["aspect_ratio"]
    quality: str = DEFAULTS["quality"]
    exposure: float = Field(
        default=DEFAULT_EXPOSURE,
        ge=EXPOSURE_STEPS[0],
        le=EXPOSURE_STEPS[-1],
        allow_inf_nan=False,
    )
    aperture: float = Field(
        default=DEFAULT_APERTURE,
        ge=APERTURE_RANGE[0],
        le=APERTURE_RANGE[1],
        allow_inf_nan=False,
    )
    shutter_speed: str = DEFAULT_SHUTTER_SPEED
    subject: str = ""
    prompt_mode: PromptMode = "both"


class AssembledPrompt(BaseModel):
    main_text: str
    negative_text: str = default_negative_prompt


def _format_number(value: float) -> str:
    # shortest round-trip form, no trailing ".0" (2.8, 8, -1.5)
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


def _subject_clause(selection: SelectionState) -> str:
    subject = selection.subject.strip() or subject_fallback
    return f"Professional photography: {subject}."


def _composition_clause(selection: SelectionState) -> Optional[str]:
    shot = find_option("shot_size", selection.shot_size)
    period = find_option("period", selection.period)
    if shot is None or period is None:
        return None
    return (
        f"The shot is framed as a {shot.name}, which {shot.description.lower()}. "
        f"Set in a {period.name} ({period.description.lower()}) context."
    )


def _gear_clause(selection: SelectionState) -> Optional[str]:
    body = find_option("body", selection.body)
    lens = find_option("lens", selection.lens)
    if body is None or lens is None:
        return None
    return (
        f"Captured with the {body.name} ({body.description}) paired with a {lens.name} lens "
        f"at f/{_format_number(selection.aperture)}, {selection.shutter_speed}s. "
        f"Utilizing its {lens.description.lower()} to achieve superior micro-contrast "
        f"and edge-to-edge sharpness."
    )


def _lighting_clause(selection: SelectionState) -> Optional[str]:
    style = find_option("lighting_style", selection.lighting_style)
    light = find_option("lighting_type", selection.lighting_type)
    if style is None or light is None:
        return None
    return (
        f"The scene is masterfully illuminated with a {style.name} style, creating "
        f"{style.description.lower()}, and further refined by {light.name} which adds "
        f"{light.description.lower()} and professional-grade light falloff."
    )


def _film_clause(selection: SelectionState) -> Optional[str]:
    if selection.film_stock == NONE_OPTION_ID:
        return None
    film = find_option("film_stock", selection.film_stock)
    if film is None:
        return None
    return (
        f"Emulating the aesthetic of {film.name} film stock, "
        f"characterized by {film.description.lower()}."
    )


def _filter_clause(selection: SelectionState) -> Optional[str]:
    if selection.lens_filter == NONE_OPTION_ID:
        return None
    lens_filter = find_option("lens_filter", selection.lens_filter)
    if lens_filter is None:
        return None
    return f"Enhanced with a {lens_filter.name} which {lens_filter.description.lower()}."


def _atmosphere_clause(selection: SelectionState) -> Optional[str]:
    weather = find_option("weather", selection.weather)
    palette = find_option("palette", selection.palette)
    if weather is None or palette is None:
        return None
    return (
        f"Atmospheric conditions: {weather.name} ({weather.description.lower()}). "
        f"Color science: {palette.name} ({palette.description.lower()})."
    )


def _exposure_clause(selection: SelectionState) -> Optional[str]:
    exposure = selection.exposure
    if exposure == 0:
        return None
    sign = "+" if exposure > 0 else ""
    mood = (
        "bright, airy highlights and high-key aesthetics"
        if exposure > 0
        else "deep, moody shadows and rich blacks"
    )
    return f"Exposure compensation set to {sign}{_format_number(exposure)} EV for {mood}."


def engine_suffix(selection: SelectionState) -> str:
    if selection.engine == "midjourney":
        ratio = selection.aspect_ratio
        if find_option("aspect_ratio", ratio) is None:
            ratio = DEFAULTS["aspect_ratio"]
        return midjourney_suffix.replace("ASPECT_RATIO", ratio.replace(":", "/", 1))
    if selection.engine == "stable-diffusion":
        return stable_diffusion_suffix
    return ""


_CLAUSE_BUILDERS = (
    ("composition", _composition_clause),
    ("gear", _gear_clause),
    ("lighting", _lighting_clause),
    ("film", _film_clause),
    ("filter", _filter_clause),
    ("atmosphere", _atmosphere_clause),
    ("exposure", _exposure_clause),
)


def assemble(selection: SelectionState) -> AssembledPrompt:
    """Compose the main prompt for a selection.

    Clause order is fixed: subject, composition, gear, lighting, film, filter,
    atmosphere, exposure, technical quality, engine suffix. A clause whose
    records cannot be found in the catalog is left out.
    """
    excluded = _MODE_EXCLUDES.get(selection.prompt_mode, frozenset())
    clauses = [_subject_clause(selection)]
    for name, build in _CLAUSE_BUILDERS:
        if name in excluded:
            continue
        clause = build(selection)
        if clause:
            clauses.append(clause)
    clauses.append(technical_quality + engine_suffix(selection))
    return AssembledPrompt(main_text=" ".join(clauses), negative_text=default_negative_prompt)


def randomize_selection(
    selection: SelectionState,
    rng: Optional[random.Random] = None,
) -> SelectionState:
    rng = rng or random.Random()
    updates: dict[str, object] = {
        key: rng.choice(CATEGORIES[key]).id for key in _RANDOMIZED_CATEGORIES
    }
    updates["exposure"] = (rng.randint(0, 8) - 4) * 0.5
    updates["aperture"] = rng.choice(APERTURE_STOPS)
    return selection.model_copy(update=updates)
