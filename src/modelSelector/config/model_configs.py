"""
Analysis presets for modelSelector.

Each preset names the response, its two classes and the candidate
specifications compared for one dataset.
"""

from typing import Any, Dict, List

from ..core.base import ModelSpecification

MODEL_CONFIGS = {
    "palmetto": {
        "response": "species",
        # 原始数据中 species 以 1/2 编码
        "response_mapping": {1: "Serenoa repens", 2: "Sabal etonia"},
        "positive_class": "Sabal etonia",
        "reference_class": "Serenoa repens",
        "specifications": {
            "Model 1": ["height", "length", "width", "green_lvs"],
            "Model 2": ["height", "width", "green_lvs"],
        },
    },
}

# Nutrient columns used for the food PCA (USDA column names after snake-casing)
NUTRIENT_COLUMNS: List[str] = [
    "energy_kcal",
    "protein_g",
    "fat_g",
    "carb_g",
    "sugar_g",
    "fiber_g",
]

FOOD_GROUP_COLUMN = "food_group"


def get_preset(name: str) -> Dict[str, Any]:
    """Look up an analysis preset by name."""
    try:
        return MODEL_CONFIGS[name]
    except KeyError:
        raise ValueError(f"Unknown preset: {name}. Available: {', '.join(MODEL_CONFIGS)}") from None


def preset_specifications(name: str) -> List[ModelSpecification]:
    """Model specifications of a preset, in declaration order."""
    preset = get_preset(name)
    return [
        ModelSpecification(label=label, response=preset["response"], predictors=tuple(predictors))
        for label, predictors in preset["specifications"].items()
    ]
