from __future__ import annotations

from enum import Enum

"""RunStatus enum for one consolidation session.

The session moves through the statuses below for every uploaded file; starting
a new upload or calling reset() discards all prior state.
"""


class RunStatus(Enum):
    """Lifecycle of a consolidation run.

    State transitions: idle → mapping → processing → (success | error)

    - IDLE: Nothing loaded
    - MAPPING: File decoded, waiting for a column mapping
    - PROCESSING: Normalization and aggregation in progress
    - SUCCESS: Aggregated result available
    - ERROR: Decode, mapping or normalization failed; a loaded sheet can be re-mapped
    """
    IDLE = "idle"
    MAPPING = "mapping"
    PROCESSING = "processing"
    SUCCESS = "success"
    ERROR = "error"
