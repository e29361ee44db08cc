"""
Credit Unit calculation.

Calls are billed in quarter-hour steps. Anything longer than 52 minutes is
billed at least one full CU.
"""

import math

FULL_CU_THRESHOLD_MINUTES = 52


def calculate_cu(duration_minutes) -> float:
    if duration_minutes is None or duration_minutes <= 0:
        return 0.0
    value = math.ceil(duration_minutes * 4 / 60) / 4
    if duration_minutes > FULL_CU_THRESHOLD_MINUTES:
        return max(1.0, value)
    return value
