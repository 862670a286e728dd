"""Auto-correction of files flagged by validation."""

from .auto_corrector import AutoCorrector, CorrectionRequestError
from .prompts import content_fix_prompt, missing_file_prompt

__all__ = [
    "AutoCorrector",
    "CorrectionRequestError",
    "content_fix_prompt",
    "missing_file_prompt",
]
