from __future__ import annotations

from spreceiver.ui.cli import run

run()
