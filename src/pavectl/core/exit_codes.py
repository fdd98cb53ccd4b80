from __future__ import annotations

OK = 0
ERR_FAILED = 1
ERR_USAGE = 2
ERR_CONFIG = 3
ERR_IO = 4
ERR_VALIDATION = 5
ERR_INTERNAL = 99
