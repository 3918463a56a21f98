"""Turn individual config files into partial metadata records."""

from __future__ import annotations

import json
import re
import tomllib
from pathlib import Path, PurePosixPath
from typing import Any, Callable, Dict, List, Optional

from .licenses import classify_license
from .logging import get_logger
from .models import Contributor, Dependency, License, MetadataRecord, Repository

logger = get_logger("converters")

# "Jane Doe <jane@example.com> (https://jane.dev)"
_PERSON_RE = re.compile(r"^\s*(?P<name>[^<(]*?)\s*(?:<(?P<email>[^>]+)>)?\s*(?:\((?P<url>[^)]+)\))?\s*$")
_REQUIREMENT_RE = re.compile(r"^\s*(?P<name>[A-Za-z0-9][A-Za-z0-9._\-]*)(?:\[[^\]]*\])?\s*(?P<spec>[^;#]*)")

Converter = Callable[[Path], MetadataRecord]


def convert(root: Path, relative_path: str) -> Optional[MetadataRecord]:
    """Return the record for *relative_path*, or ``None`` when unsupported or unreadable."""
    filename = PurePosixPath(relative_path).name
    converter = CONVERTERS.get(filename)
    if converter is None:
        logger.debug("No converter for %s", relative_path)
        return None

    path = Path(root) / relative_path
    try:
        record = converter(path)
    except (OSError, ValueError) as exc:
        # json.JSONDecodeError and tomllib.TOMLDecodeError are ValueErrors.
        logger.warning("Skipping %s: %s", relative_path, exc)
        return None
    record.source_config_file_path = str(path)
    return record


def convert_package_json(path: Path) -> MetadataRecord:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("package.json must contain an object")

    people = []
    if data.get("author"):
        people.append(data["author"])
    people.extend(_as_list(data.get("contributors")))

    dependencies: List[Dependency] = []
    for key in ("dependencies", "devDependencies", "peerDependencies"):
        section = data.get(key)
        if isinstance(section, dict):
            dependencies.extend(
                Dependency(name=str(name), version=_as_text(version))
                for name, version in section.items()
            )

    repository = data.get("repository")
    if isinstance(repository, dict):
        repository = repository.get("url")

    return MetadataRecord(
        name=_as_text(data.get("name")),
        description=_as_text(data.get("description")),
        version=_as_text(data.get("version")),
        contributors=_people(people),
        repository=Repository.from_url(repository) if isinstance(repository, str) and repository else None,
        license=_declared_license(data.get("license")),
        dependencies=dependencies or None,
    )


def convert_pyproject(path: Path) -> MetadataRecord:
    data = tomllib.loads(path.read_text(encoding="utf-8"))
    project = data.get("project")
    if not isinstance(project, dict):
        poetry = data.get("tool", {}).get("poetry") if isinstance(data.get("tool"), dict) else None
        project = poetry if isinstance(poetry, dict) else {}

    requirements: List[str] = []
    declared = project.get("dependencies")
    if isinstance(declared, list):
        requirements.extend(item for item in declared if isinstance(item, str))
    dependencies = [dep for dep in map(_parse_requirement, requirements) if dep is not None]
    if isinstance(declared, dict):
        # poetry style: name = "version"
        dependencies.extend(
            Dependency(name=str(name), version=_as_text(version))
            for name, version in declared.items()
            if str(name).lower() != "python"
        )

    urls = project.get("urls") if isinstance(project.get("urls"), dict) else {}
    repository_url = project.get("repository") or urls.get("Repository") or urls.get("Source")

    license_value = project.get("license")
    if isinstance(license_value, dict):
        license_value = license_value.get("text") or license_value.get("file")

    return MetadataRecord(
        name=_as_text(project.get("name")),
        description=_as_text(project.get("description")),
        version=_as_text(project.get("version")),
        contributors=_people(_as_list(project.get("authors")) + _as_list(project.get("maintainers"))),
        repository=Repository.from_url(repository_url) if isinstance(repository_url, str) else None,
        license=_declared_license(license_value),
        dependencies=dependencies or None,
    )


def convert_cargo(path: Path) -> MetadataRecord:
    data = tomllib.loads(path.read_text(encoding="utf-8"))
    package = data.get("package") if isinstance(data.get("package"), dict) else {}

    dependencies: List[Dependency] = []
    for key in ("dependencies", "dev-dependencies", "build-dependencies"):
        section = data.get(key)
        if not isinstance(section, dict):
            continue
        for name, spec in section.items():
            version = spec.get("version") if isinstance(spec, dict) else spec
            dependencies.append(Dependency(name=str(name), version=_as_text(version)))

    repository_url = package.get("repository")
    return MetadataRecord(
        name=_as_text(package.get("name")),
        description=_as_text(package.get("description")),
        version=_as_text(package.get("version")),
        contributors=_people(_as_list(package.get("authors"))),
        repository=Repository.from_url(repository_url) if isinstance(repository_url, str) else None,
        license=_declared_license(package.get("license")),
        dependencies=dependencies or None,
    )


def convert_requirements(path: Path) -> MetadataRecord:
    dependencies: List[Dependency] = []
    for line in path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith(("#", "-")):
            continue
        dependency = _parse_requirement(stripped)
        if dependency is not None:
            dependencies.append(dependency)
    return MetadataRecord(dependencies=dependencies or None)


CONVERTERS: Dict[str, Converter] = {
    "package.json": convert_package_json,
    "pyproject.toml": convert_pyproject,
    "Cargo.toml": convert_cargo,
    "requirements.txt": convert_requirements,
}


def _parse_requirement(requirement: str) -> Optional[Dependency]:
    match = _REQUIREMENT_RE.match(requirement)
    if not match:
        return None
    spec = match.group("spec").strip()
    return Dependency(name=match.group("name"), version=spec or None)


def _people(entries: List[Any]) -> Optional[List[Contributor]]:
    people: List[Contributor] = []
    for entry in entries:
        if isinstance(entry, dict):
            contributor = Contributor(
                name=_as_text(entry.get("name")),
                email=_as_text(entry.get("email")),
                url=_as_text(entry.get("url")),
            )
        elif isinstance(entry, str):
            match = _PERSON_RE.match(entry)
            if not match:
                continue
            contributor = Contributor(
                name=match.group("name") or None,
                email=match.group("email"),
                url=match.group("url"),
            )
        else:
            continue
        if (contributor.name or contributor.email) and contributor not in people:
            people.append(contributor)
    return people or None


def _declared_license(value: Any) -> Optional[License]:
    text = _as_text(value)
    if not text:
        return None
    if len(text) > 80 or "\n" in text:
        return classify_license(text)
    return License(kind=text)


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _as_text(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


__all__ = [
    "CONVERTERS",
    "convert",
    "convert_cargo",
    "convert_package_json",
    "convert_pyproject",
    "convert_requirements",
]
