from __future__ import annotations


class FatalError(Exception):
    """Something about this instance's own environment or assets is broken.

    Raised for the process hostname and the home page template. The app maps
    it to process exit; it is never used for a peer that cannot be reached.
    """
