"""CLI package.

The ``cli`` sub-package contains the Click application.  It should
import only from the public API of the parent package and the demo
module, never from the state machine directly.
"""
from __future__ import annotations
