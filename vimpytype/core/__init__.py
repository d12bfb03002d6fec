"""
Core Module - Shared vocabulary used by the editor and training packages.

Components:
- keys: Token names and the sequence notation parser
- difficulty: Difficulty levels and their key sets
- scheduling: Injected timer capability (manual and asyncio backed)

Design Principle:
Nothing in here depends on the editor or on training sessions, so both can
import from vimpytype.core without cycles.
"""

from vimpytype.core.difficulty import (
    KEY_SETS,
    Difficulty,
    KeySet,
    get_difficulty,
    get_key_set,
)
from vimpytype.core.keys import (
    ADVANCE,
    BACKSPACE,
    ENTER,
    ESCAPE,
    format_sequence,
    is_printable,
    modified_token,
    parse_sequence,
)
from vimpytype.core.scheduling import (
    AsyncioScheduler,
    ManualScheduler,
    Scheduler,
    TimerSlot,
)

__all__ = [
    # Keys
    "ADVANCE",
    "BACKSPACE",
    "ENTER",
    "ESCAPE",
    "format_sequence",
    "is_printable",
    "modified_token",
    "parse_sequence",
    # Difficulty
    "Difficulty",
    "KeySet",
    "KEY_SETS",
    "get_difficulty",
    "get_key_set",
    # Scheduling
    "Scheduler",
    "ManualScheduler",
    "AsyncioScheduler",
    "TimerSlot",
]
