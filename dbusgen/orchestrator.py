"""Pipeline orchestration for generate and combine runs."""

from __future__ import annotations

from typing import List, Sequence, Tuple, Union

from .config import GeneratorConfig
from .errors import InvalidConfiguration
from .introspect import combine_documents, parse_introspection
from .logging import get_logger
from .merge import filter_interfaces, merge
from .models import Interface
from .postproc.validate import SourceValidator
from .synthesis import SynthesisOptions, Synthesizer

Source = Tuple[str, Union[str, bytes]]


class Orchestrator:
    """Coordinates parsing, merging, filtering and synthesis for one run."""

    def __init__(self, validator: SourceValidator | None = None) -> None:
        self.validator = validator or SourceValidator()
        self.logger = get_logger("orchestrator")

    def load_interfaces(self, sources: Sequence[Source]) -> List[Interface]:
        """Parse every source and merge the results, first seen wins."""
        interfaces: List[Interface] = []
        for name, document in sources:
            chunk = parse_introspection(document, source=name)
            self.logger.debug("Loaded %d interfaces from %s", len(chunk), name)
            interfaces = merge(interfaces, chunk)
        return interfaces

    def run_generate(self, sources: Sequence[Source], config: GeneratorConfig) -> str:
        """Return validated bindings for the interfaces found in ``sources``."""
        synthesizer = Synthesizer(
            SynthesisOptions(
                package_name=config.package_name,
                format=config.format,
                prefixes=tuple(config.prefixes),
            ),
            validator=self.validator,
        )
        synthesizer.check_options()
        if config.only and config.exclude:
            raise InvalidConfiguration("cannot combine only and except interface filters")

        interfaces = self.load_interfaces(sources)
        selected = filter_interfaces(interfaces, only=config.only, exclude=config.exclude)
        self.logger.info(
            "Generating package %s from %d of %d interfaces",
            config.package_name,
            len(selected),
            len(interfaces),
        )
        return synthesizer.synthesize(selected)

    def run_combine(self, sources: Sequence[Source]) -> str:
        """Return a single introspection document holding every unique interface."""
        self.logger.info("Combining %d introspection documents", len(sources))
        return combine_documents([document for _, document in sources])


__all__ = ["Orchestrator", "Source"]
