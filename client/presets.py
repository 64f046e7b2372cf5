from typing import NamedTuple

class Preset(NamedTuple):
    label: str
    text: str

PRESETS = [
    Preset(
        "Gov / Civil Service",
        "Formal Thai government ID photo. Black suit jacket, white dress shirt, conservative tie; "
        "neat short haircut. Keep same face/identity. Plain blue background, even lighting.",
    ),
    Preset(
        "Corporate",
        "Corporate headshot. Dark blazer, white shirt, neutral light-gray background. "
        "Clean flyaway hair; keep same face/identity; natural skin tone.",
    ),
    Preset(
        "Student ID",
        "Student ID photo. White collared shirt, tidy hair, plain white background. "
        "Keep same face/identity and proportions.",
    ),
]

def preset_text(index: int) -> str:
    if not 0 <= index < len(PRESETS):
        raise IndexError(f"preset index {index} out of range (0..{len(PRESETS) - 1})")
    return PRESETS[index].text
