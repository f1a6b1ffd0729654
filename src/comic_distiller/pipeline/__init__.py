"""Page pipeline and conversion orchestration."""

from .orchestrator import Orchestrator
from .page_pipeline import PagePipeline, PipelineResult, page_name

__all__ = ["Orchestrator", "PagePipeline", "PipelineResult", "page_name"]
