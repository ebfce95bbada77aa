"""Stage timing and record counts for the feed pipeline."""
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Optional

from nft_pipeline.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class StageMetrics:
    """Metrics for a single pipeline stage."""

    stage_name: str
    rows_in: int
    rows_out: int
    duration_s: float
    skipped: int = 0
    extras: dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def retention_pct(self) -> float:
        if self.rows_in == 0:
            return 0.0
        return (self.rows_out / self.rows_in) * 100


@dataclass
class PipelineMetrics:
    """Aggregated metrics for a whole feed run."""

    stages: list[StageMetrics] = field(default_factory=list)

    @property
    def total_duration_s(self) -> float:
        return sum(stage.duration_s for stage in self.stages)

    @property
    def total_skipped(self) -> int:
        """Records dropped by the skip error policy, across stages."""
        return sum(stage.skipped for stage in self.stages)

    def log_summary(self):
        """Log pipeline summary metrics."""
        logger.info(
            "pipeline_completed",
            total_duration_s=self.total_duration_s,
            stages_count=len(self.stages),
            skipped_records=self.total_skipped,
            stages={stage.stage_name: stage.rows_out for stage in self.stages},
        )


@contextmanager
def StageTimer(stage_name: str, rows_in: int, extras: Optional[dict] = None):
    """
    Context manager for timing pipeline stages with error tracking.

    Usage:
        with StageTimer("stop_ids", rows_in=len(stops)) as timer:
            stops = assign_stop_ids(stops)
            timer.rows_out = len(stops)
    """
    start_time = time.perf_counter()
    timer = StageMetrics(stage_name=stage_name, rows_in=rows_in, rows_out=0, duration_s=0.0)
    if extras:
        timer.extras = extras

    logger.info("stage_started", stage=stage_name, rows_in=rows_in)

    try:
        yield timer
        timer.duration_s = time.perf_counter() - start_time

        fields = dict(timer.extras)
        if timer.skipped:
            fields["skipped"] = timer.skipped
        logger.info(
            "stage_completed",
            stage=stage_name,
            rows_in=timer.rows_in,
            rows_out=timer.rows_out,
            retention_pct=timer.retention_pct,
            duration_s=timer.duration_s,
            **fields,
        )
    except Exception as e:
        timer.duration_s = time.perf_counter() - start_time
        timer.error = str(e)
        logger.error(
            "stage_failed",
            stage=stage_name,
            rows_in=timer.rows_in,
            duration_s=timer.duration_s,
            error=str(e),
            exc_info=True,
        )
        raise
