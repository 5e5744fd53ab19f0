"""
Catalog ingestion: packaged bundles and the live `bazel help flags-as-proto` output.

Sources
- Packaged bundle (".lz4"): a `FlagCollection` protobuf, lz4 block-compressed with its
  uncompressed size prepended (4 bytes, little endian). Every FlagInfo lists the bazel
  releases it exists in (`bazel_versions`), which feeds the version filter of the index.
- JSON bundle: {"flag_infos": [{...}, ...]} using the catalog field names, optionally
  gzip-compressed (file name ending in ".gz").
- Live binary: `<bazel> --ignore_all_rc_files help flags-as-proto` prints a base64
  encoded `FlagCollection` protobuf on stdout. rc files are ignored so that a broken
  bazelrc cannot break the introspection call itself.

Failures are reported as distinct faults (see bazelflags.faults) and never swallowed:
- LaunchError       the binary could not be started.
- NonZeroExitError  the binary exited unsuccessfully (stdout/stderr captured).
- DecodeError       base64/lz4/protobuf/gzip/json/record decoding failed.
"""
import base64
import binascii
import functools
import gzip
import json
import logging
import os
import subprocess
from pathlib import Path

import lz4.block
from google.protobuf import descriptor_pb2, descriptor_pool, message_factory
from google.protobuf.message import DecodeError as ProtobufDecodeError

from .catalog import FlagCatalog, FlagDefinition
from .faults import *
from .index import FlagIndex
from .utils import *

logger = logging.getLogger(__name__)

_STRING = descriptor_pb2.FieldDescriptorProto.TYPE_STRING
_BOOL = descriptor_pb2.FieldDescriptorProto.TYPE_BOOL
_OPTIONAL = descriptor_pb2.FieldDescriptorProto.LABEL_OPTIONAL
_REPEATED = descriptor_pb2.FieldDescriptorProto.LABEL_REPEATED

# FlagInfo schema, as emitted by `bazel help flags-as-proto`; bazel_versions only
# appears in packaged bundles
_FLAG_INFO_FIELDS = (
    ("name", 1, _STRING, _OPTIONAL),
    ("has_negative_flag", 2, _BOOL, _OPTIONAL),
    ("documentation", 3, _STRING, _OPTIONAL),
    ("commands", 4, _STRING, _REPEATED),
    ("abbreviation", 5, _STRING, _OPTIONAL),
    ("allows_multiple", 6, _BOOL, _OPTIONAL),
    ("effect_tags", 7, _STRING, _REPEATED),
    ("metadata_tags", 8, _STRING, _REPEATED),
    ("documentation_category", 9, _STRING, _OPTIONAL),
    ("requires_value", 10, _BOOL, _OPTIONAL),
    ("old_name", 11, _STRING, _OPTIONAL),
    ("deprecation_warning", 12, _STRING, _OPTIONAL),
    ("bazel_versions", 999, _STRING, _REPEATED),
)


@functools.cache
def _flag_collection_type():
    """
    Build (once) the FlagCollection message class from its descriptor.
    """
    file = descriptor_pb2.FileDescriptorProto(
        name="bazelflags/bazel_flags.proto",
        package="bazelflags",
        syntax="proto2",
    )
    info = file.message_type.add(name="FlagInfo")
    for name, number, kind, label in _FLAG_INFO_FIELDS:
        info.field.add(name=name, number=number, type=kind, label=label)
    collection = file.message_type.add(name="FlagCollection")
    collection.field.add(
        name="flag_infos",
        number=1,
        type=descriptor_pb2.FieldDescriptorProto.TYPE_MESSAGE,
        label=_REPEATED,
        type_name=".bazelflags.FlagInfo",
    )

    pool = descriptor_pool.DescriptorPool()
    pool.AddSerializedFile(file.SerializeToString())
    return message_factory.GetMessageClass(pool.FindMessageTypeByName("bazelflags.FlagCollection"))


def _optional(object, /):
    # empty strings mean "absent" in both catalog encodings
    return object if object else None


def definition_from_mapping(record, /):
    """
    Build a FlagDefinition from a catalog record (a mapping using the catalog field names).

    Raises
    - DecodeError(stage="record") when the record is not a mapping or its fields are malformed.
    """
    if not isinstance(record, dict):
        raise DecodeError(
            "flag record must be an object, got %s" % type(record).__name__,
            title="malformed flag record",
            code=FaultCode.MALFORMED_RECORD,
            docs=getdoc(FaultCode.MALFORMED_RECORD),
            stage="record",
            payload=record,
        )
    try:
        return FlagDefinition(
            record.get("name"),
            old_name=_optional(record.get("old_name")),
            abbreviation=_optional(record.get("abbreviation")),
            commands=record.get("commands", ()),
            requires_value=record.get("requires_value", False),
            has_negative_flag=record.get("has_negative_flag", False),
            allows_multiple=record.get("allows_multiple", False),
            versions=record.get("bazel_versions", ()),
            metadata_tags=record.get("metadata_tags", ()),
            effect_tags=record.get("effect_tags", ()),
            documentation=_optional(record.get("documentation")),
            category=_optional(record.get("documentation_category")),
            deprecation_warning=_optional(record.get("deprecation_warning")),
        )
    except (TypeError, ValueError) as exception:
        raise DecodeError(
            "malformed flag record %r: %s" % (record.get("name"), exception),
            title="malformed flag record",
            code=FaultCode.MALFORMED_RECORD,
            hint="every record needs a non-empty 'name'; list fields must hold strings",
            docs=getdoc(FaultCode.MALFORMED_RECORD),
            stage="record",
            payload=record,
        ) from exception


def decode_json_catalog(payload, /, version=None):
    """
    Decode a JSON bundle (bytes or str) into a FlagCatalog.
    """
    try:
        document = json.loads(payload)
    except (UnicodeDecodeError, json.JSONDecodeError) as exception:
        raise DecodeError(
            "failed to decode flag bundle as json: %s" % exception,
            title="undecodable flag bundle",
            code=FaultCode.DECODE_FAILURE,
            docs=getdoc(FaultCode.DECODE_FAILURE),
            stage="json",
            payload=payload,
        ) from exception

    if not isinstance(document, dict) or not isinstance(records := document.get("flag_infos", []), list):
        raise DecodeError(
            "flag bundle must be an object with a 'flag_infos' list",
            title="undecodable flag bundle",
            code=FaultCode.DECODE_FAILURE,
            docs=getdoc(FaultCode.DECODE_FAILURE),
            stage="json",
            payload=payload,
        )
    return FlagCatalog(map(definition_from_mapping, records), version)


def decode_proto_catalog(payload, /, version=None):
    """
    Decode a binary FlagCollection protobuf into a FlagCatalog.

    `bazel_versions` is carried over when present (packaged bundles); the live
    binary output leaves it empty.
    """
    collection = _flag_collection_type()()
    try:
        collection.ParseFromString(payload)
    except ProtobufDecodeError as exception:
        raise DecodeError(
            "failed to decode protobuf flags",
            title="undecodable flag collection",
            code=FaultCode.DECODE_FAILURE,
            docs=getdoc(FaultCode.DECODE_FAILURE),
            stage="protobuf",
            payload=payload,
        ) from exception

    definitions = []
    for info in collection.flag_infos:
        definitions.append(definition_from_mapping({
            "name": info.name,
            "old_name": info.old_name,
            "abbreviation": info.abbreviation,
            "commands": list(info.commands),
            "requires_value": info.requires_value,
            "has_negative_flag": info.has_negative_flag,
            "allows_multiple": info.allows_multiple,
            "bazel_versions": list(info.bazel_versions),
            "metadata_tags": list(info.metadata_tags),
            "effect_tags": list(info.effect_tags),
            "documentation": info.documentation,
            "documentation_category": info.documentation_category,
            "deprecation_warning": info.deprecation_warning,
        }))
    return FlagCatalog(definitions, version)


def decode_packaged_catalog(payload, /, version=None):
    """
    Decode a packaged bundle (size-prepended lz4 block around a FlagCollection).
    """
    try:
        collection = lz4.block.decompress(payload)
    except (lz4.block.LZ4BlockError, ValueError) as exception:
        raise DecodeError(
            "failed to decompress packaged flags: %s" % exception,
            title="undecodable flag bundle",
            code=FaultCode.DECODE_FAILURE,
            docs=getdoc(FaultCode.DECODE_FAILURE),
            stage="lz4",
            payload=payload,
        ) from exception
    return decode_proto_catalog(collection, version)


def load_bundle(path, /, version=Unset):
    """
    Load a flag bundle from disk and index it for `version` (no filter when Unset/None).

    ".lz4" files are packaged protobuf bundles; anything else is read as JSON
    (gunzipped first when the name ends in ".gz").
    """
    path = Path(path)
    logger.info("loading flag bundle from %s", path)
    payload = path.read_bytes()
    if path.suffix == ".lz4":
        return FlagIndex.from_catalog(decode_packaged_catalog(payload, coalesce(version)))
    if path.suffix == ".gz":
        try:
            payload = gzip.decompress(payload)
        except (OSError, EOFError) as exception:
            raise DecodeError(
                "failed to decompress flag bundle %s" % path,
                title="undecodable flag bundle",
                code=FaultCode.DECODE_FAILURE,
                docs=getdoc(FaultCode.DECODE_FAILURE),
                stage="gzip",
                payload=path,
            ) from exception
    return FlagIndex.from_catalog(decode_json_catalog(payload, coalesce(version)))


def load_flags_from_command(command=Unset, /, *, arguments=Unset):
    """
    Ask a bazel binary for its flags and index them (without a version filter).

    Parameters
    - command: Unset | str. Binary to run; defaults to $BAZEL, then "bazel".
    - arguments: Unset | Iterable[str]. Extra startup options placed before "help".
    """
    command = coalesce(command, os.environ.get("BAZEL", "bazel"))
    argv = [command, "--ignore_all_rc_files", *coalesce(arguments, ()), "help", "flags-as-proto"]
    logger.info("loading flags from %s", " ".join(argv))

    try:
        result = subprocess.run(argv, capture_output=True, check=False)
    except OSError as exception:
        return trigger(LaunchError(
            "failed to launch %r: %s" % (command, exception),
            title="launch failure",
            code=FaultCode.LAUNCH_FAILURE,
            hint="make sure the bazel binary exists and is executable (or set $BAZEL)",
            docs=getdoc(FaultCode.LAUNCH_FAILURE),
            command=command,
            reason=str(exception),
        ))

    stdout = result.stdout.decode("utf-8", errors="replace")
    stderr = result.stderr.decode("utf-8", errors="replace")
    if result.returncode != 0:
        return trigger(NonZeroExitError(
            "%r exited with code %d" % (command, result.returncode),
            title="non-zero exit",
            code=FaultCode.NON_ZERO_EXIT,
            details=(("stdout", stdout), ("stderr", stderr)),
            docs=getdoc(FaultCode.NON_ZERO_EXIT),
            command=command,
            status=result.returncode,
            stdout=stdout,
            stderr=stderr,
        ))

    try:
        payload = base64.b64decode(result.stdout, validate=False)
    except (binascii.Error, ValueError):
        return trigger(DecodeError(
            "failed to base64-decode output: %s" % stdout,
            title="undecodable output",
            code=FaultCode.DECODE_FAILURE,
            docs=getdoc(FaultCode.DECODE_FAILURE),
            stage="base64",
            payload=stdout,
        ))

    return FlagIndex.from_catalog(decode_proto_catalog(payload))


__all__ = (
    "definition_from_mapping",
    "decode_json_catalog",
    "decode_proto_catalog",
    "decode_packaged_catalog",
    "load_bundle",
    "load_flags_from_command",
)
