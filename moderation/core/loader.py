# moderation/core/loader.py

"""Rule catalogue loader for the moderation engine."""

import re
import threading
import yaml
import logging
from pathlib import Path
from typing import Dict, List, Any, Optional, Pattern, Tuple, Union

from moderation.core.definitions import Category
from moderation.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_RULES_PATH = Path(__file__).parent / "rules.yaml"

REQUIRED_SECTIONS = ["contact_rules", "bypass_rules", "warnings", "corrections"]


class RuleLoader:
    """Loads detection rules, canned warnings, and corrections from YAML.

    The default instance reads the bundled rules.yaml once and is shared
    for the application lifecycle. Other catalogues can be loaded by
    constructing the loader with an explicit path.
    """

    _instance: Optional["RuleLoader"] = None
    _lock = threading.Lock()

    def __init__(self, config_path: Optional[Union[str, Path]] = None) -> None:
        self.config_path = Path(config_path) if config_path else DEFAULT_RULES_PATH
        self._config: Dict[str, Any] = {}
        self._corrections: List[Tuple[Pattern, str]] = []
        self._load_config()

    def _load_config(self) -> None:
        """Reads and validates the catalogue file.

        Raises:
            ConfigurationError: If file is missing, invalid, or empty.
        """
        if not self.config_path.exists():
            error_msg = f"Rule catalogue not found: {self.config_path}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg)

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                self._config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"YAML parsing error: {e}", exc_info=True)
            raise ConfigurationError(
                f"Failed to parse {self.config_path.name}: {e}"
            ) from e

        if not self._config or not isinstance(self._config, dict):
            raise ConfigurationError("Rule catalogue is empty or invalid")

        try:
            self._validate_config()

            self._corrections = [
                (re.compile(c["pattern"]), c["replacement"])
                for c in self._config["corrections"]
            ]
        except ConfigurationError:
            raise
        except Exception as e:
            logger.error(f"Rule catalogue validation failed: {e}", exc_info=True)
            raise ConfigurationError(f"Invalid rule catalogue: {e}") from e

        logger.info(
            "Rule catalogue loaded successfully",
            extra={
                "config_path": str(self.config_path),
                "rule_count": len(self.get_rules()),
                "warning_count": len(self._config["warnings"]),
            },
        )

    def _validate_config(self) -> None:
        """Validates sections, rule shapes, and regex syntax.

        Raises:
            ConfigurationError: If any part of the catalogue is unusable.
        """
        missing = [s for s in REQUIRED_SECTIONS if s not in self._config]
        if missing:
            error_msg = f"Missing required catalogue sections: {missing}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg)

        for section in ("contact_rules", "bypass_rules", "warnings", "corrections"):
            if not isinstance(self._config[section], list):
                raise ConfigurationError(f"'{section}' must be a list")

        names = set()
        for rule in self._config["contact_rules"] + self._config["bypass_rules"]:
            if not isinstance(rule, dict):
                raise ConfigurationError(f"Rule must be a mapping: {rule!r}")

            name = rule.get("name")
            if not name:
                raise ConfigurationError(f"Rule without a name: {rule}")
            if name in names:
                raise ConfigurationError(f"Duplicate rule name: {name}")
            names.add(name)

            category = rule.get("category")
            if category not in Category.ALL or category == Category.NONE:
                raise ConfigurationError(
                    f"Rule '{name}' has unknown category: {category}"
                )

            if not rule.get("patterns") and not rule.get("deny_list"):
                raise ConfigurationError(
                    f"Rule '{name}' needs 'patterns' or 'deny_list'"
                )

            for key in ("patterns", "deny_list"):
                if rule.get(key) is not None and not isinstance(rule[key], list):
                    raise ConfigurationError(f"Rule '{name}' '{key}' must be a list")

            for regex in rule.get("patterns") or []:
                self._check_regex(regex, f"rule '{name}'")

        warnings = self._config["warnings"]
        if not warnings or not all(isinstance(w, str) and w for w in warnings):
            raise ConfigurationError("'warnings' must be a non-empty list of strings")

        for correction in self._config["corrections"]:
            if not isinstance(correction, dict):
                raise ConfigurationError(
                    f"Correction must be a mapping: {correction!r}"
                )
            if "pattern" not in correction or "replacement" not in correction:
                raise ConfigurationError(
                    f"Correction needs 'pattern' and 'replacement': {correction}"
                )
            self._check_regex(correction["pattern"], "corrections")
            if not isinstance(correction["replacement"], str):
                raise ConfigurationError(
                    f"Correction replacement must be text: {correction!r}"
                )

    @staticmethod
    def _check_regex(regex: str, owner: str) -> None:
        try:
            re.compile(regex)
        except (re.error, TypeError) as e:
            raise ConfigurationError(f"Invalid regex in {owner}: {regex!r} ({e})") from e

    @classmethod
    def get_instance(cls) -> "RuleLoader":
        """Returns the shared loader, honouring the configured catalogue path."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    # Lazy import to prevent circular dependency
                    from moderation.service.config import settings

                    cls._instance = cls(settings.rules_path)
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Drops the shared loader so the next access reloads from disk."""
        with cls._lock:
            cls._instance = None

    def get_rules(self) -> List[Dict[str, Any]]:
        """Returns all detection rules in scan order.

        Returns:
            Contact rules followed by bypass rules, each a dict with
            'name', 'category' and 'patterns' and/or 'deny_list' keys
        """
        return list(self._config["contact_rules"]) + list(
            self._config["bypass_rules"]
        )

    def get_warnings(self) -> Tuple[str, ...]:
        """Returns the ordered canned chat warnings."""
        return tuple(self._config["warnings"])

    def get_listing_warning(self) -> str:
        """Returns the notice shown when a description is rejected."""
        return self._config.get(
            "listing_warning",
            "This description was saved without enhancement.",
        )

    def get_corrections(self) -> List[Tuple[Pattern, str]]:
        """Returns compiled (pattern, replacement) pairs in application order."""
        return self._corrections
