from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class OptionRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str


def _records(*rows: tuple[str, str, str]) -> tuple[OptionRecord, ...]:
    return tuple(OptionRecord(id=row[0], name=row[1], description=row[2]) for row in rows)


CAMERA_BODIES = _records(
    ("sony-a7r-v", "Sony A7R V", "High resolution, professional detail"),
    ("canon-eos-r5", "Canon EOS R5", "Classic color science, versatile"),
    ("nikon-z9", "Nikon Z9", "Robust, high-speed performance"),
    ("fujifilm-gfx100", "Fujifilm GFX100 II", "Medium format depth and texture"),
    ("leica-m11", "Leica M11", "Iconic rangefinder look, street photography"),
    ("hasselblad-x2d", "Hasselblad X2D 100C", "Ultimate color accuracy, medium format"),
)

LENSES = _records(
    ("35mm-f14", "35mm f/1.4", "Classic storytelling, wide but natural"),
    ("50mm-f12", "50mm f/1.2", 'The "Nifty Fifty", human-eye perspective'),
    ("85mm-f12", "85mm f/1.2", "Ultimate portrait lens, creamy bokeh"),
    ("24-70mm-f28", "24-70mm f/2.8", "The versatile workhorse zoom"),
    ("16-35mm-f28", "16-35mm f/2.8", "Ultra-wide for landscapes and architecture"),
    ("100mm-macro", "100mm f/2.8 Macro", "Extreme detail for close-ups"),
    ("70-200mm-f28", "70-200mm f/2.8", "Compression and isolation for sports/wildlife"),
)

LIGHTING_STYLES = _records(
    ("cinematic", "Cinematic", "High contrast, dramatic shadows"),
    ("soft-glamour", "Soft Glamour", "Flattering, even light, minimal shadows"),
    ("moody-noir", "Moody Noir", "Dark, atmospheric, heavy shadows"),
    ("high-key", "High Key", "Bright, airy, optimistic"),
    ("low-key", "Low Key", "Dark background, focused light"),
    ("golden-hour", "Golden Hour", "Warm, directional, long shadows"),
    ("blue-hour", "Blue Hour", "Cool, ethereal, twilight glow"),
)

LIGHTING_TYPES = _records(
    ("rembrandt", "Rembrandt Lighting", "Classic triangle of light on the cheek"),
    ("butterfly", "Butterfly Lighting", "Symmetrical shadow under the nose"),
    ("rim-light", "Rim Lighting", "Backlit edges to separate subject from background"),
    ("split-lighting", "Split Lighting", "Subject lit on exactly one side"),
    ("volumetric", "Volumetric Lighting", 'Visible light beams, "God rays"'),
    ("neon-cyberpunk", "Neon / Cyberpunk", "Vibrant, multi-colored artificial light"),
    ("natural-window", "Natural Window Light", "Soft, directional, organic"),
    ("studio-strobes", "Studio Strobes", "Powerful, controlled artificial flashes for crisp detail"),
    ("natural-diffused", "Natural Diffused Light", "Soft, even illumination from an overcast sky or large softbox"),
)

SHOT_SIZES = _records(
    ("establishing-shot", "Establishing Shot", "A shot at the head of a scene that clearly shows the location the action is set in"),
    ("extreme-wide", "Extreme Wide Shot (EWS)", "Makes the subject appear small against their location, emphasizing the vastness of the environment"),
    ("wide-shot", "Wide Shot (WS)", "Balances both the subject and the surrounding imagery, keeping the entire subject in frame while giving context"),
    ("full-shot", "Full Shot (FS)", "Lets the subject fill the frame from head to toe while still allowing some features of the scenery"),
    ("medium-wide", "Medium Wide Shot (MWS)", "Frames the subject from roughly the knees up, splitting the difference between a full shot and a medium shot"),
    ("cowboy-shot", "Cowboy Shot (CS)", "Frames the subject from mid-thighs up, used to include action and emotion while showing the subject from the waist down"),
    ("medium-shot", "Medium Shot (MS)", "Frames the subject from the waist up, balancing composition between the subject and their surroundings"),
    ("medium-closeup", "Medium Close-Up (MCU)", "Frames the subject from the chest up, perfect for capturing facial expressions and slight gestures"),
    ("closeup", "Close-Up (CU)", "Fills the frame with a part of the subject, typically the face, to reveal emotions and reactions"),
    ("extreme-closeup", "Extreme Close-Up (ECU)", "Fills the frame with tiny details like eyes or textures, capturing nuances that would otherwise be missed"),
    ("low-angle", "Low Angle", "Looking up at subject, powerful and heroic"),
    ("high-angle", "High Angle", "Looking down at subject, vulnerable or overview"),
    ("birds-eye", "Bird's Eye", "Directly from above, map-like perspective"),
)

FILM_STOCKS = _records(
    ("none", "Digital (No Emulation)", "Clean digital capture with no film emulation"),
    ("kodak-portra-400", "Kodak Portra 400", "Warm, natural skin tones and soft pastel highlights"),
    ("kodak-ektar-100", "Kodak Ektar 100", "Ultra-fine grain and vivid, saturated color"),
    ("fujifilm-velvia-50", "Fujifilm Velvia 50", "Punchy saturation and deep contrast for landscapes"),
    ("cinestill-800t", "CineStill 800T", "Tungsten balance with glowing red halation around highlights"),
    ("ilford-hp5", "Ilford HP5 Plus", "Gritty black and white with pronounced grain"),
    ("kodak-tri-x", "Kodak Tri-X 400", "Classic photojournalistic black and white contrast"),
)

LENS_FILTERS = _records(
    ("none", "No Filter", "Unaltered optical path"),
    ("circular-polarizer", "Circular Polarizer", "Cuts glare and deepens blue skies"),
    ("nd-filter", "ND Filter", "Allows long exposures and smooth motion blur in daylight"),
    ("black-pro-mist", "Black Pro-Mist 1/4", "Softens highlights with a subtle cinematic bloom"),
    ("graduated-nd", "Graduated ND", "Balances a bright sky against a darker foreground"),
    ("star-filter", "Star Filter", "Turns point light sources into crisp starbursts"),
)

COLOR_PALETTES = _records(
    ("natural", "Natural", "True-to-life color with balanced saturation"),
    ("teal-orange", "Teal & Orange", "Blockbuster complementary grading"),
    ("muted-earth", "Muted Earth Tones", "Desaturated browns, olives and ochres"),
    ("monochrome", "Monochrome", "Black and white tonal range"),
    ("pastel", "Pastel", "Soft, light, low-contrast hues"),
    ("neon-vivid", "Neon Vivid", "Electric magentas, cyans and saturated accents"),
    ("bleach-bypass", "Bleach Bypass", "Silvery, high-contrast, desaturated look"),
)

WEATHER_EFFECTS = _records(
    ("clear", "Clear Sky", "Crisp air and unobstructed light"),
    ("overcast", "Overcast", "Flat, diffused light under thick cloud cover"),
    ("light-rain", "Light Rain", "Wet reflective surfaces and fine droplets"),
    ("heavy-fog", "Heavy Fog", "Dense haze that swallows the background"),
    ("snowfall", "Snowfall", "Drifting flakes and a cold, muffled stillness"),
    ("thunderstorm", "Thunderstorm", "Brooding skies with flashes of lightning"),
    ("dust-haze", "Dust Haze", "Warm airborne particles catching the light"),
)

TIME_PERIODS = _records(
    ("contemporary", "Contemporary", "Present-day setting and styling"),
    ("1920s", "1920s", "Art deco glamour and jazz-age detail"),
    ("1950s", "1950s", "Mid-century optimism and chrome"),
    ("1970s", "1970s", "Warm analog tones and retro fashion"),
    ("1980s", "1980s", "Bold colors and synth-era neon"),
    ("victorian", "Victorian Era", "Ornate nineteenth-century detail"),
    ("near-future", "Near Future", "Sleek, understated futuristic design"),
)

ENGINE_OPTIMIZATIONS = _records(
    ("universal", "Universal", "Plain natural-language prompt for any engine"),
    ("midjourney", "Midjourney", "Appends aspect ratio, version and stylize parameters"),
    ("stable-diffusion", "Stable Diffusion", "Appends weighted quality keywords"),
    ("dall-e", "DALL-E", "Natural-language prompt, no parameter syntax"),
    ("imagen", "Imagen", "Natural-language prompt, no parameter syntax"),
    ("flux", "Flux", "Natural-language prompt, no parameter syntax"),
)

ASPECT_RATIOS = _records(
    ("1:1", "1:1", "Square (Social Media)"),
    ("4:3", "4:3", "Classic Photography"),
    ("3:2", "3:2", "35mm Film Standard"),
    ("16:9", "16:9", "Widescreen Cinematic"),
    ("9:16", "9:16", "Portrait (Stories/Reels)"),
)

QUALITY_OPTIONS = _records(
    ("1K", "Standard", "Fast generation, 1024px"),
    ("2K", "HD", "High definition, 2048px"),
    ("4K", "4K Ultra", "Maximum detail, 4096px"),
)

CATEGORIES: dict[str, tuple[OptionRecord, ...]] = {
    "body": CAMERA_BODIES,
    "lens": LENSES,
    "lighting_style": LIGHTING_STYLES,
    "lighting_type": LIGHTING_TYPES,
    "shot_size": SHOT_SIZES,
    "film_stock": FILM_STOCKS,
    "lens_filter": LENS_FILTERS,
    "palette": COLOR_PALETTES,
    "weather": WEATHER_EFFECTS,
    "period": TIME_PERIODS,
    "engine": ENGINE_OPTIMIZATIONS,
    "aspect_ratio": ASPECT_RATIOS,
    "quality": QUALITY_OPTIONS,
}

DEFAULTS: dict[str, str] = {key: records[0].id for key, records in CATEGORIES.items()}
DEFAULTS["shot_size"] = "wide-shot"
DEFAULTS["aspect_ratio"] = "16:9"

NONE_OPTION_ID = "none"

EXPOSURE_STEPS: tuple[float, ...] = tuple(step * 0.5 for step in range(-4, 5))
APERTURE_RANGE: tuple[float, float] = (1.2, 16.0)
APERTURE_STOPS: tuple[float, ...] = (1.2, 1.4, 1.8, 2.0, 2.8, 4.0, 5.6, 8.0, 11.0)
SHUTTER_SPEEDS: tuple[str, ...] = (
    "1/8000", "1/4000", "1/2000", "1/1000", "1/500", "1/250", "1/125", "1/60",
    "1/30", "1/15", "1/8", "1/4", "1/2", "1", "2", "5", "10", "30",
)

DEFAULT_EXPOSURE = 0.0
DEFAULT_APERTURE = 2.8
DEFAULT_SHUTTER_SPEED = "1/125"


def find_option(category: str, option_id: Optional[str]) -> Optional[OptionRecord]:
    for record in CATEGORIES.get(category, ()):
        if record.id == option_id:
            return record
    return None


def is_valid_option(category: str, option_id: Optional[str]) -> bool:
    return find_option(category, option_id) is not None


def catalog_payload() -> dict[str, Any]:
    return {
        "categories": {
            key: [record.model_dump() for record in records]
            for key, records in CATEGORIES.items()
        },
        "defaults": dict(DEFAULTS),
        "exposure_steps": list(EXPOSURE_STEPS),
        "aperture_range": list(APERTURE_RANGE),
        "shutter_speeds": list(SHUTTER_SPEEDS),
    }
