from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    # points = line_factor * n * n + clear_bonus, so 1..4 lines give 10, 25, 50, 85
    line_factor: int = 5
    clear_bonus: int = 5

    def score_for_lines(self, lines: int) -> int:
        if lines <= 0:
            return 0
        return self.line_factor * lines * lines + self.clear_bonus
