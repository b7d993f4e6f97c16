"""
errors.py — Error taxonomy
===========================
Only one condition is an exception: bad user input.  It is raised before
anything is mutated, and the HTTP layer turns it into a 400 with the
message as the status text.

"Not found" is NOT an error here — searches and deletes that miss end in
a normal terminal phase with a status string.
"""


class InvalidInput(ValueError):
    """Non-numeric field, out-of-range index, unknown node or algorithm."""
