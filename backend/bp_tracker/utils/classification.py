"""
Blood pressure category classification.
"""

NORMAL = 'Normal'
ELEVATED = 'Elevated'
STAGE_1 = 'High BP Stage 1'
STAGE_2 = 'High BP Stage 2'

# Evaluated top to bottom, first match wins.
BP_CATEGORY_RULES = (
    (NORMAL, lambda systolic, diastolic: systolic < 120 and diastolic < 80),
    (ELEVATED, lambda systolic, diastolic: systolic < 130 and diastolic < 80),
    (STAGE_1, lambda systolic, diastolic: systolic < 140 or diastolic < 90),
)

BP_CATEGORIES = [label for label, _ in BP_CATEGORY_RULES] + [STAGE_2]


def classify_bp(systolic: int, diastolic: int) -> str:
    """Classify a blood pressure reading into a display category.

    Works on any integer pair, including values outside the accepted
    reading ranges.
    """
    for label, matches in BP_CATEGORY_RULES:
        if matches(systolic, diastolic):
            return label
    return STAGE_2
