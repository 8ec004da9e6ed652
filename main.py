"""Entry point: generate a cluster from settings.json and print it as JSON."""
from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Dict

from starforge.config.preferences import Preferences
from starforge.engine.logger import init_logger
from starforge.errors import GenerationError
from starforge.generation.generator import ClusterGenerator


SETTINGS_PATH = Path("settings.json")
DEFAULT_SEED = 1


def load_settings() -> Dict[str, Any]:
    if not SETTINGS_PATH.exists():
        return {"seed": DEFAULT_SEED}
    try:
        return json.loads(SETTINGS_PATH.read_text())
    except json.JSONDecodeError:
        return {"seed": DEFAULT_SEED}


def main() -> int:
    settings = load_settings()
    logger = init_logger(SETTINGS_PATH)
    try:
        preferences = Preferences.from_dict(settings.get("preferences", {}))
        generator = ClusterGenerator(preferences, logger)
        cluster = generator.generate(int(settings.get("seed", DEFAULT_SEED)), settings.get("starCount"))
    except GenerationError as exc:
        logger.channel("galaxy").error("Generation failed: %s", exc)
        return 1
    print(cluster.to_json())
    return 0


if __name__ == "__main__":
    sys.exit(main())
