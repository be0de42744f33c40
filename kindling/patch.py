"""Patching of YAML document streams with merge patches and JSON 6902 patches.

Patches are matched to documents on their kind and apiVersion; a patch
that does not set apiVersion matches documents of its kind in any version.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

import yaml

from kindling.config import PatchJSON6902
from kindling.jsonpatch import JSONPatchError, apply_json_patch, merge_patch


class PatchError(ValueError):
    """Raised when documents or patches cannot be parsed or applied."""


class _JSONLoader(yaml.SafeLoader):
    """Safe loader that keeps timestamps as plain strings."""


_JSONLoader.yaml_implicit_resolvers = {
    first: [
        (tag, regexp) for tag, regexp in resolvers if tag != "tag:yaml.org,2002:timestamp"
    ]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _json_key(key: Any) -> str:
    if isinstance(key, bool):
        return "true" if key else "false"
    if key is None:
        return "null"
    return str(key)


def _jsonify(value: Any) -> Any:
    if isinstance(value, dict):
        return {_json_key(key): _jsonify(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_jsonify(item) for item in value]
    return value


def _load_yaml(raw: str) -> Any:
    return yaml.load(raw, Loader=_JSONLoader)


def _yaml_to_json(raw: str) -> Any:
    try:
        return _jsonify(_load_yaml(raw))
    except yaml.YAMLError as exc:
        raise PatchError(f"error converting YAML to JSON: {exc}") from exc


def _json_to_yaml(data: Any) -> str:
    text = yaml.safe_dump(data, default_flow_style=False, sort_keys=True, allow_unicode=True)
    if text.endswith("\n...\n"):
        text = text[: -len("...\n")]
    return text


@dataclass(frozen=True)
class MatchInfo:
    """The kind and apiVersion used to match patches with documents."""

    kind: str = ""
    api_version: str = ""


def parse_yaml_match_info(raw: str) -> MatchInfo:
    """Read the kind and apiVersion of a YAML document."""
    try:
        data = _load_yaml(raw)
    except yaml.YAMLError as exc:
        raise PatchError(f"failed to parse type meta: {exc}") from exc
    if data is None:
        return MatchInfo()
    if not isinstance(data, dict):
        raise PatchError("failed to parse type meta: document is not a mapping")
    kind = data.get("kind")
    api_version = data.get("apiVersion")
    for name, value in (("kind", kind), ("apiVersion", api_version)):
        if value is not None and not isinstance(value, str):
            raise PatchError(f"failed to parse type meta: {name} must be a string")
    return MatchInfo(kind=kind or "", api_version=api_version or "")


def group_version_to_api_version(group: str, version: str) -> str:
    """Join group and version into an apiVersion, e.g. "apps/v1" or "v1"."""
    if not group:
        return version
    return f"{group}/{version}"


def split_yaml_documents(stream: str) -> list[str]:
    """Split a YAML stream on "---" separator lines.

    Anything after "---" on a separator line is discarded, as is the
    newline in front of it; a separator at the very start of the stream
    is left in the first document.
    """
    documents: list[str] = []
    rest = stream
    while rest:
        index = rest.find("\n---")
        if index < 0:
            documents.append(rest)
            break
        documents.append(rest[:index])
        newline = rest.find("\n", index + len("\n---"))
        if newline < 0:
            break
        rest = rest[newline + 1 :]
    return documents


def _matches(resource: MatchInfo, patch_info: MatchInfo) -> bool:
    return resource.kind == patch_info.kind and (
        not patch_info.api_version or resource.api_version == patch_info.api_version
    )


@dataclass
class _Parsed:
    info: MatchInfo
    data: Any


def _parse_documents(raws: Iterable[str]) -> list[_Parsed]:
    return [_Parsed(parse_yaml_match_info(raw), _yaml_to_json(raw)) for raw in raws]


def _convert_json6902_patches(patches: Iterable[PatchJSON6902]) -> list[_Parsed]:
    converted = []
    for config_patch in patches:
        operations = _yaml_to_json(config_patch.patch)
        if not isinstance(operations, list) or not all(isinstance(op, dict) for op in operations):
            raise PatchError("invalid JSON 6902 patch: expected a list of operations")
        info = MatchInfo(
            kind=config_patch.kind,
            api_version=group_version_to_api_version(config_patch.group, config_patch.version),
        )
        converted.append(_Parsed(info, operations))
    return converted


def patch(
    to_patch: str,
    patches: Iterable[str] = (),
    patches_6902: Iterable[PatchJSON6902] = (),
) -> str:
    """Apply merge patches, then JSON 6902 patches, to each matching document.

    Returns the patched stream, documents re-encoded with sorted keys and
    separated by "---" lines.
    """
    try:
        resources = _parse_documents(split_yaml_documents(to_patch))
    except PatchError as exc:
        raise PatchError(f"failed to parse yaml to patch: {exc}") from exc
    try:
        merge_patches = _parse_documents(patches)
    except PatchError as exc:
        raise PatchError(f"failed to parse patches: {exc}") from exc
    try:
        json6902_patches = _convert_json6902_patches(patches_6902)
    except PatchError as exc:
        raise PatchError(f"failed to parse JSON 6902 patches: {exc}") from exc

    encoded = []
    for resource in resources:
        document = resource.data
        for merge in merge_patches:
            if _matches(resource.info, merge.info):
                try:
                    document = merge_patch(document, merge.data)
                except JSONPatchError as exc:
                    raise PatchError(f"failed to apply patch: {exc}") from exc
        for json_patch in json6902_patches:
            if _matches(resource.info, json_patch.info):
                try:
                    document = apply_json_patch(document, json_patch.data)
                except JSONPatchError as exc:
                    raise PatchError(f"failed to apply JSON 6902 patch: {exc}") from exc
        encoded.append(_json_to_yaml(document))
    return "---\n".join(encoded)