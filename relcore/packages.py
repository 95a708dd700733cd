"""
Runtime package descriptors for wrapper-based outputs.
"""

import logging
from importlib import metadata
from pathlib import Path
from typing import Iterable, List, NamedTuple, Tuple

from packaging.requirements import InvalidRequirement, Requirement
from packaging.utils import canonicalize_name


class PackageSpec(NamedTuple):
    """An installed package: its metadata and the files it installed."""
    name: str
    version: str
    spec_path: Path
    install_paths: Tuple[Path, ...]


def spec_for_distribution(dist) -> PackageSpec:
    """Describe an importlib.metadata distribution."""
    spec_path = None
    top_level = []
    for file in dist.files or []:
        first = file.parts[0]
        if first.endswith('.dist-info') or first.endswith('.egg-info'):
            if spec_path is None:
                spec_path = Path(dist.locate_file(first))
            continue
        # Skip scripts installed outside site-packages and bytecode caches
        if first in ('..', '__pycache__') or first in top_level:
            continue
        top_level.append(first)

    return PackageSpec(
        name=dist.metadata['Name'],
        version=dist.version,
        spec_path=spec_path,
        install_paths=tuple(Path(dist.locate_file(entry)) for entry in top_level),
    )


def _requirement_names(dist) -> List[str]:
    """Names of the requirements that apply on this interpreter, extras excluded."""
    names = []
    for line in dist.requires or []:
        try:
            requirement = Requirement(line)
        except InvalidRequirement:
            logging.warning(f"Ignoring unparsable requirement of {dist.metadata['Name']}: {line}")
            continue
        if requirement.marker is not None and not requirement.marker.evaluate({'extra': ''}):
            continue
        names.append(requirement.name)
    return names


def resolve_package_specs(names: Iterable[str]) -> List[PackageSpec]:
    """
    Describe the given installed packages and everything they require.

    Args:
        names: Distribution names declared as runtime dependencies

    Returns:
        One PackageSpec per distribution, dependencies after their dependents
    """
    specs = []
    seen = set()
    pending = list(names)

    while pending:
        name = pending.pop(0)
        key = canonicalize_name(name)
        if key in seen:
            continue
        seen.add(key)

        try:
            dist = metadata.distribution(name)
        except metadata.PackageNotFoundError:
            logging.warning(f"Package {name} is not installed; not bundling it")
            continue

        specs.append(spec_for_distribution(dist))
        pending.extend(_requirement_names(dist))

    return specs
