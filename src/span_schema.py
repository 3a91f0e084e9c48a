"""Haystack span protobuf messages, built at import time.

The schema matches ``proto/span.proto``; the descriptors are assembled
with ``descriptor_pb2`` instead of generated code so no protoc step is
needed.  Messages live in a private descriptor pool so they never clash
with another copy of the Haystack schema loaded into the default pool.
"""

from __future__ import annotations

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

PACKAGE = "haystack"

_F = descriptor_pb2.FieldDescriptorProto

# (name, number) pairs
_TAG_TYPES = (("STRING", 0), ("DOUBLE", 1), ("BOOL", 2), ("LONG", 3), ("BINARY", 4))


def _add_field(message, name, number, field_type, repeated=False, type_name=None, oneof_index=None):
    field = message.field.add()
    field.name = name
    field.number = number
    field.type = field_type
    field.label = _F.LABEL_REPEATED if repeated else _F.LABEL_OPTIONAL
    if type_name is not None:
        field.type_name = type_name
    if oneof_index is not None:
        field.oneof_index = oneof_index


def _build_file_descriptor() -> descriptor_pb2.FileDescriptorProto:
    fdp = descriptor_pb2.FileDescriptorProto()
    fdp.name = "haystack/span.proto"
    fdp.package = PACKAGE
    fdp.syntax = "proto3"

    # --- Tag ---
    tag = fdp.message_type.add()
    tag.name = "Tag"
    tag_type = tag.enum_type.add()
    tag_type.name = "TagType"
    for name, number in _TAG_TYPES:
        value = tag_type.value.add()
        value.name = name
        value.number = number
    tag.oneof_decl.add().name = "myvalue"
    _add_field(tag, "key", 1, _F.TYPE_STRING)
    _add_field(tag, "type", 2, _F.TYPE_ENUM, type_name=f".{PACKAGE}.Tag.TagType")
    _add_field(tag, "vStr", 3, _F.TYPE_STRING, oneof_index=0)
    _add_field(tag, "vLong", 4, _F.TYPE_INT64, oneof_index=0)
    _add_field(tag, "vDouble", 5, _F.TYPE_DOUBLE, oneof_index=0)
    _add_field(tag, "vBool", 6, _F.TYPE_BOOL, oneof_index=0)
    _add_field(tag, "vBytes", 7, _F.TYPE_BYTES, oneof_index=0)

    # --- Log ---
    log = fdp.message_type.add()
    log.name = "Log"
    _add_field(log, "timestamp", 1, _F.TYPE_INT64)
    _add_field(log, "fields", 2, _F.TYPE_MESSAGE, repeated=True, type_name=f".{PACKAGE}.Tag")

    # --- Span ---
    span = fdp.message_type.add()
    span.name = "Span"
    _add_field(span, "traceId", 1, _F.TYPE_STRING)
    _add_field(span, "spanId", 2, _F.TYPE_STRING)
    _add_field(span, "parentSpanId", 3, _F.TYPE_STRING)
    _add_field(span, "serviceName", 4, _F.TYPE_STRING)
    _add_field(span, "operationName", 5, _F.TYPE_STRING)
    _add_field(span, "startTime", 6, _F.TYPE_INT64)
    _add_field(span, "duration", 7, _F.TYPE_INT64)
    _add_field(span, "logs", 8, _F.TYPE_MESSAGE, repeated=True, type_name=f".{PACKAGE}.Log")
    _add_field(span, "tags", 9, _F.TYPE_MESSAGE, repeated=True, type_name=f".{PACKAGE}.Tag")

    return fdp


_pool = descriptor_pool.DescriptorPool()
_pool.AddSerializedFile(_build_file_descriptor().SerializeToString())

SpanMessage = message_factory.GetMessageClass(_pool.FindMessageTypeByName(f"{PACKAGE}.Span"))
TagMessage = message_factory.GetMessageClass(_pool.FindMessageTypeByName(f"{PACKAGE}.Tag"))
LogMessage = message_factory.GetMessageClass(_pool.FindMessageTypeByName(f"{PACKAGE}.Log"))

_tag_type_enum = TagMessage.DESCRIPTOR.enum_types_by_name["TagType"]
TAG_TYPE_STRING = _tag_type_enum.values_by_name["STRING"].number
TAG_TYPE_BOOL = _tag_type_enum.values_by_name["BOOL"].number
