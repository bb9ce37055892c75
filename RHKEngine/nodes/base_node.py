"""
Base class for RHK Engine processing nodes.

Nodes share the LLM client dependency and name-prefixed logging.
"""

from abc import ABC, abstractmethod
from typing import Any

from loguru import logger

from ..llms.base import LLMClient


class BaseNode(ABC):
    """
    Node base class.

    Subclasses implement run(); validate_input() and process_output() are
    hooks with pass-through defaults.
    """

    def __init__(self, llm_client: LLMClient, node_name: str = ""):
        self.llm_client = llm_client
        self.node_name = node_name or self.__class__.__name__

    @abstractmethod
    def run(self, input_data: Any, **kwargs) -> Any:
        """
        Run the node.

        Args:
            input_data: node input
            **kwargs: extra options

        Returns:
            Node result.
        """

    def validate_input(self, input_data: Any) -> bool:
        return True

    def process_output(self, output: Any) -> Any:
        return output

    def log_info(self, message: str):
        logger.info(f"[{self.node_name}] {message}")

    def log_warning(self, message: str):
        logger.warning(f"[{self.node_name}] {message}")

    def log_error(self, message: str):
        logger.error(f"[{self.node_name}] {message}")


__all__ = ["BaseNode"]
