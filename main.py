"""
Attendance Pro - Main Entry Point.

Programmatic access to the attendance pipeline: build a configured
session, feed it chat text and screenshots, answer its clarifications
and export the sheet.

Usage:
    from main import create_session, run_extraction

    session = create_session()
    outcome = session.process(chat_text, images)

    # or in one step, with export
    session, output = run_extraction(chat_text, ["shot1.png"])

Author: ML Engineering Team
Version: 1.0.0
"""

from typing import Any, Dict, Optional, Sequence, Tuple

from config import ConfigurationManager
from attendance_pro.utils.logger import setup_logger_from_config, get_logger
from attendance_pro.extraction import ExtractionGateway, create_gateway
from attendance_pro.input_handler import ImageEncoder
from attendance_pro.session import AttendanceSession
from attendance_pro.output_handler import OutputHandler


def initialize_system(config_path: Optional[str] = None) -> ConfigurationManager:
    """
    Load configuration and set up logging.

    Args:
        config_path: Optional custom settings file.

    Returns:
        Initialized configuration manager.
    """
    config = ConfigurationManager(config_path)
    logger = setup_logger_from_config()

    logger.info("=" * 60)
    logger.info("ATTENDANCE PRO")
    logger.info("=" * 60)
    logger.info(f"Version: {config.get('project.version', '1.0.0')}")
    logger.info(f"Model: {config.get('gateway.model')}")

    return config


def create_session(
    config_path: Optional[str] = None,
    gateway: Optional[ExtractionGateway] = None
) -> AttendanceSession:
    """
    Build a ready-to-use attendance session.

    Args:
        config_path: Optional custom settings file.
        gateway: Extraction gateway. If None, the configured provider
                is created (which needs an API key).

    Returns:
        New AttendanceSession with empty state.
    """
    initialize_system(config_path)
    return AttendanceSession(gateway or create_gateway())


def run_extraction(
    text: str,
    image_sources: Sequence[Any] = (),
    session: Optional[AttendanceSession] = None,
    export_csv: bool = True,
    export_excel: bool = False,
    output_dir: Optional[str] = None
) -> Tuple[AttendanceSession, Dict[str, Optional[str]]]:
    """
    Process one batch of messages and export the resulting sheet.

    Args:
        text: Pasted chat text.
        image_sources: Screenshot paths, bytes or PIL images.
        session: Existing session to extend. Created if None.
        export_csv: Whether to write the CSV file.
        export_excel: Whether to write the Excel file.
        output_dir: Output directory override.

    Returns:
        Tuple of (session, output paths).
    """
    session = session or create_session()
    logger = get_logger(__name__)

    images = ImageEncoder().encode_many(image_sources)
    outcome = session.process(text, images)

    for question in outcome.clarifications:
        logger.warning(f"Clarification needed: {question.content}")

    output_info = OutputHandler().save(
        session,
        csv=export_csv,
        excel=export_excel,
        output_dir=output_dir
    )

    summary = session.summary()
    logger.info(
        f"Session: {summary['records']} records, "
        f"{summary['needs_review']} need review, "
        f"{summary['pending_clarifications']} open questions"
    )
    return session, output_info
