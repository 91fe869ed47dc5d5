"""Logging configuration for the clipwatch CLI."""
import logging


def configure_logging(verbose: bool) -> None:
    """Configure logging level based on verbosity setting.

    Args:
        verbose: If True, set DEBUG level; otherwise WARNING level.

    Transient read failures while watching are logged at DEBUG, so they
    only show up with --verbose. Operator output does not go through
    logging.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(name)s: %(message)s" if verbose else "%(levelname)s: %(message)s",
        handlers=[logging.StreamHandler()],
        force=True,
    )
