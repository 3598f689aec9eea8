"""
Base pipeline for document processing.

Defines the stages and runs them in order over one document's data dict.
"""
from abc import ABC, abstractmethod
from typing import Dict, Any, List, Callable
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class PipelineStage:
    """A single stage in the pipeline."""
    name: str
    processor: Callable[[Dict[str, Any]], Dict[str, Any]]
    required: bool = True
    skip_on_error: bool = False


class DocumentPipeline(ABC):
    """
    Base class for document processing pipelines.

    Subclasses define which processors to run and in what order.
    """

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._stages: List[PipelineStage] = []

    @abstractmethod
    def build_stages(self) -> List[PipelineStage]:
        """
        Define the processing stages for this pipeline.

        Returns:
            List of PipelineStage objects
        """
        pass

    def execute(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Execute the pipeline.

        A failing stage that is required and not skip_on_error re-raises;
        otherwise the error is logged, recorded under "errors" and the
        remaining stages run on the data as it was before the stage.

        Args:
            data: Input data for one document

        Returns:
            Processed data
        """
        if not self._stages:
            self._stages = self.build_stages()

        self.logger.debug(f"Starting pipeline: {self.__class__.__name__}")

        for stage in self._stages:
            try:
                self.logger.debug(f"Executing stage: {stage.name}")
                data = stage.processor(data)
            except Exception as e:
                self.logger.error(f"Error in stage {stage.name}: {e}")

                if stage.required and not stage.skip_on_error:
                    raise
                data.setdefault("errors", []).append(f"{stage.name}: {e}")

        self.logger.debug(f"Pipeline completed: {self.__class__.__name__}")
        return data
