"""
Base Service Interface
Base classes for all services
"""
import logging

logger = logging.getLogger(__name__)


class BaseService:
    """
    Base class for all services
    Provides common functionality
    """

    def __init__(self):
        self.logger = logging.getLogger(f"kanban.services.{self.__class__.__name__}")

    def log_info(self, message: str):
        """Info log"""
        self.logger.info(f"[{self.__class__.__name__}] {message}")

    def log_error(self, message: str, exc_info: bool = False):
        """Error log"""
        self.logger.error(f"[{self.__class__.__name__}] {message}", exc_info=exc_info)

    def log_warning(self, message: str):
        """Warning log"""
        self.logger.warning(f"[{self.__class__.__name__}] {message}")

    def log_debug(self, message: str):
        """Debug log"""
        self.logger.debug(f"[{self.__class__.__name__}] {message}")
