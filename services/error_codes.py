"""
Error codes for declined wheel operations.

Command handlers branch on these instead of parsing message text.

Usage:
    from services import error_codes

    result = controller.spin()
    if result.error_code == error_codes.SPIN_IN_PROGRESS:
        ...
"""

# Spin state machine
SPIN_IN_PROGRESS = "spin_in_progress"
NOT_ENOUGH_SEGMENTS = "not_enough_segments"

# Segment editing
SEGMENT_NOT_FOUND = "segment_not_found"
