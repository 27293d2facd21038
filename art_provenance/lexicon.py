from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from .acquisition_method import AcquisitionMethod, AcquisitionMethodClassifier

logger = logging.getLogger(__name__)

DEFAULT_LEXICON_PATH = Path(__file__).parent / "lexicon.yaml"


def _read_yaml(yaml_path: Path) -> Dict[str, Any]:
    if not yaml_path or not yaml_path.exists():
        raise FileNotFoundError(f"Lexicon file not found: {yaml_path}")
    try:
        with open(yaml_path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing {yaml_path}: {e}")


@dataclass(frozen=True)
class ProvenanceLexicon:
    """
    Fixed vocabularies used by the extraction pipeline.

    Loaded from lexicon.yaml in the package directory unless another file or
    dictionary is given. Instances are immutable and can be shared between
    extractors.
    """
    footnote_divider: str
    abbreviations: Tuple[str, ...]
    name_extenders: Tuple[str, ...]
    certainty_words: Tuple[str, ...]
    acquisition_methods: Tuple[AcquisitionMethod, ...]
    classifier: AcquisitionMethodClassifier = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'classifier', AcquisitionMethodClassifier(self.acquisition_methods))

    @classmethod
    def default(cls) -> ProvenanceLexicon:
        """The lexicon shipped with the package (loaded once)."""
        return _default_lexicon()

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> ProvenanceLexicon:
        """
        Load a lexicon from a specific YAML file.

        Keys missing from the file are taken from the default lexicon.

        Args:
            yaml_path: Path to YAML lexicon file.

        Returns:
            ProvenanceLexicon: Lexicon loaded from YAML.
        """
        return cls.from_dict(_read_yaml(Path(yaml_path)))

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any], defaults: Optional[Dict[str, Any]] = None) -> ProvenanceLexicon:
        """
        Create a lexicon from a dictionary.

        Args:
            config_dict (Dict[str, Any]): Lexicon values.
            defaults (Optional[Dict[str, Any]]): Values for missing keys;
                read from the default lexicon.yaml when omitted.

        Returns:
            ProvenanceLexicon: Lexicon instance.

        Raises:
            ValueError: If a required key is missing from both dictionaries.
        """
        values = {}
        for key in ('footnote_divider', 'abbreviations', 'name_extenders',
                    'certainty_words', 'acquisition_methods'):
            if key in config_dict:
                values[key] = config_dict[key]
                continue
            if defaults is None:
                defaults = _read_yaml(DEFAULT_LEXICON_PATH)
            if key not in defaults:
                raise ValueError(f"Required lexicon field '{key}' not found")
            values[key] = defaults[key]

        methods = tuple(m if isinstance(m, AcquisitionMethod) else AcquisitionMethod.from_dict(m)
                        for m in values['acquisition_methods'] or ())
        return cls(
            footnote_divider=str(values['footnote_divider']),
            abbreviations=tuple(values['abbreviations'] or ()),
            name_extenders=tuple(values['name_extenders'] or ()),
            certainty_words=tuple(w.lower() for w in values['certainty_words'] or ()),
            acquisition_methods=methods,
        )

    def certainty_word(self, token: str) -> Optional[str]:
        """
        Return the certainty word the token starts with, if any.

        Args:
            token (str): Leading whitespace-delimited token of a fragment.
        """
        lowered = token.lower()
        for word in self.certainty_words:
            if lowered.startswith(word):
                return word
        return None


@lru_cache(maxsize=1)
def _default_lexicon() -> ProvenanceLexicon:
    logger.debug("Loading default lexicon from %s", DEFAULT_LEXICON_PATH)
    return ProvenanceLexicon.from_dict(_read_yaml(DEFAULT_LEXICON_PATH))
