"""
Dependency version rewriting for ``package.json`` and ``npm-shrinkwrap.json``.

Pure functions: they inspect a decoded file, decide whether a dependency on
the released package must move to the released version and, if so, update
the file in place (document and encoded content).

Only the trailing ``major.minor.patch`` of a version constraint is read or
replaced. ``github:acme/my-lib#1.0.0`` and ``1.0.0`` are handled;
pre-release suffixes (``1.2.3-beta``) have no trailing numeric version and
are left alone.
"""

import copy
import re
from dataclasses import dataclass
from typing import Any

from ripple.exceptions import MissingTagError
from ripple.types.contents import ManifestFile
from ripple.types.repos import RefSet

TRAILING_VERSION_RE = re.compile(r"(\d+)\.(\d+)\.(\d+)$")

DEPENDENCY_GROUPS = ("dependencies", "devDependencies")


@dataclass(frozen=True, order=True)
class SemVer:
    major: int
    minor: int
    patch: int

    @classmethod
    def parse(cls, text: str) -> "SemVer | None":
        """Parse the trailing ``major.minor.patch`` of ``text``."""
        m = TRAILING_VERSION_RE.search(text.strip())
        if m is None:
            return None
        return cls(int(m.group(1)), int(m.group(2)), int(m.group(3)))

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


@dataclass
class RewriteResult:
    """Outcome of a rewrite: the (possibly updated) file and whether it changed."""

    file: ManifestFile | None
    updated: bool

    @property
    def document(self) -> dict[str, Any] | None:
        return self.file.document if self.file is not None else None


def is_newer(released: str, current: str) -> bool:
    """
    True if ``released`` is strictly greater than ``current``.

    Both are compared on their trailing ``major.minor.patch``. If either has
    none, nothing is considered newer.
    """
    released_version = SemVer.parse(released)
    current_version = SemVer.parse(current)
    if released_version is None or current_version is None:
        return False
    return released_version > current_version


def replace_trailing_version(constraint: str, version: str) -> str:
    """Replace the trailing ``major.minor.patch`` of ``constraint`` with ``version``."""
    return TRAILING_VERSION_RE.sub(version, constraint.strip(), count=1)


def find_dependency(document: dict[str, Any], name: str) -> str | None:
    """
    Name of the group declaring ``name``.

    Runtime dependencies take precedence over dev dependencies.
    """
    for group in DEPENDENCY_GROUPS:
        deps = document.get(group)
        if isinstance(deps, dict) and name in deps:
            return group
    return None


def update_manifest(
    file: ManifestFile | None, dependency: str, released_version: str
) -> RewriteResult:
    """
    Bump ``dependency`` in a ``package.json`` to ``released_version``.

    Args:
        file: The manifest, or None if the repository has none
        dependency: Released package name
        released_version: Released version (``major.minor.patch``)

    Returns:
        RewriteResult; ``updated`` is False when the dependency is absent or
        the released version is not newer than the pinned one
    """
    if file is None or not isinstance(file.document, dict):
        return RewriteResult(file, False)

    group = find_dependency(file.document, dependency)
    if group is None:
        return RewriteResult(file, False)

    constraint = file.document[group][dependency]
    if not isinstance(constraint, str) or not is_newer(released_version, constraint):
        return RewriteResult(file, False)

    document = copy.deepcopy(file.document)
    document[group][dependency] = replace_trailing_version(constraint, released_version)
    file.set_document(document)
    return RewriteResult(file, True)


def find_tag_sha(refs: RefSet, tag: str, version: str) -> str:
    """
    SHA of the release tag.

    Looks for ``refs/tags/<tag>``, then the bare and ``v``-prefixed version.

    Raises:
        MissingTagError: If no candidate tag exists in ``refs``
    """
    for name in dict.fromkeys((tag, version, f"v{version}")):
        git_ref = refs.tag(name)
        if git_ref is not None:
            return git_ref.sha
    raise MissingTagError(tag)


def update_lockfile(
    refs: RefSet,
    file: ManifestFile | None,
    dependency: str,
    released_version: str,
    tag: str | None = None,
    source_lockfile: ManifestFile | None = None,
) -> RewriteResult:
    """
    Bump the locked entry of ``dependency`` in an ``npm-shrinkwrap.json``.

    The entry's ``version`` and ``from`` move to the released version, its
    ``resolved`` commit fragment to the SHA of the release tag, and its
    nested ``dependencies`` are replaced by the releasing repository's own
    locked dependencies.

    Args:
        refs: Refs of the releasing repository, tags included
        file: The lockfile, or None if the repository has none
        dependency: Released package name
        released_version: Released version (``major.minor.patch``)
        tag: Release tag name (default: ``released_version``)
        source_lockfile: The releasing repository's lockfile

    Returns:
        RewriteResult; ``updated`` is False when nothing had to change

    Raises:
        MissingTagError: If an update is due but the release tag is not in ``refs``
    """
    if file is None or not isinstance(file.document, dict):
        return RewriteResult(file, False)

    locked = file.document.get("dependencies")
    if not isinstance(locked, dict) or not isinstance(locked.get(dependency), dict):
        return RewriteResult(file, False)

    entry = locked[dependency]
    current = entry.get("version") or ""
    if SemVer.parse(current) is None:
        current = entry.get("from") or ""
    if not is_newer(released_version, current):
        return RewriteResult(file, False)

    sha = find_tag_sha(refs, tag or released_version, released_version)

    document = copy.deepcopy(file.document)
    new_entry = document["dependencies"][dependency]
    new_entry["version"] = released_version
    if isinstance(new_entry.get("from"), str):
        new_entry["from"] = replace_trailing_version(new_entry["from"], released_version)
    if isinstance(new_entry.get("resolved"), str):
        source, _, _ = new_entry["resolved"].partition("#")
        new_entry["resolved"] = f"{source}#{sha}"

    source_deps = None
    if source_lockfile is not None and isinstance(source_lockfile.document, dict):
        source_deps = source_lockfile.document.get("dependencies")
    if source_deps:
        new_entry["dependencies"] = copy.deepcopy(source_deps)
    else:
        new_entry.pop("dependencies", None)

    file.set_document(document)
    return RewriteResult(file, True)
