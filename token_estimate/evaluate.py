"""Measure estimator accuracy against a JSONL dataset of known token counts.

Each line is ``{"text": "...", "token_count": 123}``. A case fails only when
its error exceeds both the percent and the absolute threshold, so short
texts are not penalised for being off by a handful of tokens.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator

from token_estimate.estimator import EstimatorConfig, estimate
from token_estimate.tokens import relative_error

logger = logging.getLogger(__name__)

MAX_PERCENT_ERROR = 15.0
MAX_ABSOLUTE_ERROR = 20


@dataclass
class CaseResult:
    line: int
    text: str
    expected: int
    estimated: int

    @property
    def absolute_error(self) -> int:
        return abs(self.estimated - self.expected)

    @property
    def percent_error(self) -> float:
        return relative_error(self.estimated, self.expected)

    def failed(self, max_percent: float, max_absolute: int) -> bool:
        return self.percent_error > max_percent and self.absolute_error > max_absolute


@dataclass
class EvaluationReport:
    preset: str
    max_percent: float = MAX_PERCENT_ERROR
    max_absolute: int = MAX_ABSOLUTE_ERROR
    cases: list[CaseResult] = field(default_factory=list)

    @property
    def failures(self) -> list[CaseResult]:
        return [c for c in self.cases if c.failed(self.max_percent, self.max_absolute)]

    @property
    def mean_percent_error(self) -> float:
        if not self.cases:
            return 0.0
        return sum(c.percent_error for c in self.cases) / len(self.cases)

    @property
    def passed(self) -> bool:
        return not self.failures

    def to_dict(self) -> dict:
        return {
            "preset": self.preset,
            "cases": len(self.cases),
            "failures": len(self.failures),
            "mean_percent_error": round(self.mean_percent_error, 3),
            "max_percent_error": self.max_percent,
            "max_absolute_error": self.max_absolute,
        }


def read_dataset(path: Path) -> Iterator[tuple[int, str, int]]:
    """Yield (line number, text, token count) for each usable dataset line.

    Blank lines, empty texts, and malformed lines are skipped.
    """
    with Path(path).open(encoding="utf-8") as f:
        for line_num, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                record = json.loads(line)
                text = record["text"]
                if not isinstance(text, str):
                    raise TypeError(f"text must be a string, got {type(text).__name__}")
                token_count = int(record["token_count"])
            except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed dataset line %d: %s", line_num, e)
                continue
            if not text:
                continue
            yield line_num, text, token_count


def evaluate_cases(
    cases: Iterable[tuple[int, str, int]],
    config: EstimatorConfig,
    max_percent: float = MAX_PERCENT_ERROR,
    max_absolute: int = MAX_ABSOLUTE_ERROR,
) -> EvaluationReport:
    report = EvaluationReport(preset=config.name, max_percent=max_percent, max_absolute=max_absolute)
    for line_num, text, expected in cases:
        result = CaseResult(
            line=line_num,
            text=text,
            expected=expected,
            estimated=estimate(text, config),
        )
        logger.debug(
            "Line %d: expected=%d, estimated=%d, error=%.2f%%",
            line_num,
            expected,
            result.estimated,
            result.percent_error,
        )
        report.cases.append(result)
    return report


def evaluate_dataset(path: Path, config: EstimatorConfig, **thresholds) -> EvaluationReport:
    """Evaluate a preset against every case in a JSONL dataset."""
    return evaluate_cases(read_dataset(path), config, **thresholds)
