import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

PROMPTS_DIR = Path(__file__).parent.parent / "prompts"


@lru_cache(maxsize=None)
def load_prompt_template(name: str) -> Dict[str, Any]:
    """Load a prompt template and its examples from JSON file."""
    template_path = PROMPTS_DIR / f"{name}.json"
    with open(template_path, encoding="utf-8") as f:
        return json.load(f)
