"""
Common utilities for the evolvingGraphs library.

This module provides shared functionality used across all other modules:
- Custom exception hierarchy
- ID mapping between node keys and NetworkIt integer IDs
- Input validation for edge lists, triples and declared types
- Logging configuration
"""

from .exceptions import (
    EvolvingGraphError,
    ValidationError,
    LengthMismatchError,
    UnknownTimestampError,
    EdgeNotFoundError,
    GraphConstructionError,
    ConfigurationError,
    DataFormatError,
    require_positive,
    require_equal_lengths
)

from .id_mapper import IDMapper
from .validators import (
    validate_edgelist_dataframe,
    validate_triples,
    validate_value_type
)

from .logging_config import (
    setup_logging,
    get_logger,
    configure_external_library_logging,
    log_function_entry,
    log_performance_metric,
    LoggingTimer,
    JSONFormatter,
    PerformanceFilter
)
