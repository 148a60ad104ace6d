import pandas as pd
import numpy as np


def make_palmetto_frame(n_per_species: int = 50, seed: int = 42) -> pd.DataFrame:
    """Palmetto-like survey: species coded 1 (Serenoa repens) / 2 (Sabal etonia)."""
    rng = np.random.default_rng(seed)
    frames = []
    # length 区分度高，green_lvs 区分度低，height/width 两物种相近
    for code, length_mean, green_mean in ((1, 100.0, 7.0), (2, 150.0, 6.0)):
        frames.append(pd.DataFrame({
            "year": rng.choice([2010, 2011, 2012], size=n_per_species),
            "site": rng.choice([1, 2, 3, 4], size=n_per_species),
            "species": code,
            "height": rng.normal(90.0, 25.0, n_per_species).round(1),
            "length": rng.normal(length_mean, 20.0, n_per_species).round(1),
            "width": rng.normal(100.0, 25.0, n_per_species).round(1),
            "green_lvs": rng.normal(green_mean, 2.0, n_per_species).round(0),
        }))
    frame = pd.concat(frames, ignore_index=True)
    return frame.sample(frac=1.0, random_state=seed).reset_index(drop=True)


def make_food_nutrient_frame(n_per_group: int = 30, seed: int = 7) -> pd.DataFrame:
    """USDA-like nutrient table with three food groups."""
    rng = np.random.default_rng(seed)
    profiles = {
        "Vegetables and Vegetable Products": dict(energy=40, protein=2, fat=0.3, carb=8, sugar=3, fiber=3),
        "Fruits and Fruit Juices": dict(energy=60, protein=0.8, fat=0.2, carb=15, sugar=10, fiber=2),
        "Nut and Seed Products": dict(energy=580, protein=20, fat=50, carb=20, sugar=4, fiber=8),
    }
    rows = []
    for group, p in profiles.items():
        for i in range(n_per_group):
            rows.append({
                "ID": f"{group[:3].upper()}{i:03d}",
                "FoodGroup": group,
                "Energy_kcal": abs(rng.normal(p["energy"], p["energy"] * 0.2)),
                "Protein_g": abs(rng.normal(p["protein"], p["protein"] * 0.3)),
                "Fat_g": abs(rng.normal(p["fat"], p["fat"] * 0.3)),
                "Carb_g": abs(rng.normal(p["carb"], p["carb"] * 0.3)),
                "Sugar_g": abs(rng.normal(p["sugar"], p["sugar"] * 0.3)),
                "Fiber_g": abs(rng.normal(p["fiber"], p["fiber"] * 0.3)),
            })
    return pd.DataFrame(rows)


if __name__ == "__main__":
    make_palmetto_frame().to_csv("test/palmetto_test.csv", index=False)
    make_food_nutrient_frame().to_csv("test/usda_test.csv", index=False)
