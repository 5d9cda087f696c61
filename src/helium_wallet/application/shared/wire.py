"""Protobuf layout of ledger transactions.

The ledger accepts ``helium.blockchain_txn`` messages: a ``oneof txn`` whose
field number identifies the transaction kind. The schema is declared here as
data and loaded into a private descriptor pool, so no generated code is needed.
"""

from __future__ import annotations

from typing import Any, Final, NamedTuple, Optional

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory
from google.protobuf.message import DecodeError, Message
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ...domain.errors import EncodingError
from ...domain.transactions import TXN_KINDS, Payment, TxnBase, TxnModel

PACKAGE: Final[str] = "helium"
ENVELOPE_MESSAGE: Final[str] = "blockchain_txn"

_FDP = descriptor_pb2.FieldDescriptorProto
_BYTES = _FDP.TYPE_BYTES
_UINT64 = _FDP.TYPE_UINT64
_UINT32 = _FDP.TYPE_UINT32
_MESSAGE = _FDP.TYPE_MESSAGE


class FieldSpec(NamedTuple):
    name: str
    number: int
    type: int
    repeated: bool = False
    message: Optional[str] = None


MESSAGES: Final[dict[str, tuple[FieldSpec, ...]]] = {
    "payment": (
        FieldSpec("payee", 1, _BYTES),
        FieldSpec("amount", 2, _UINT64),
    ),
    "blockchain_txn_payment_v2": (
        FieldSpec("payer", 1, _BYTES),
        FieldSpec("payments", 2, _MESSAGE, repeated=True, message="payment"),
        FieldSpec("fee", 3, _UINT64),
        FieldSpec("nonce", 4, _UINT64),
        FieldSpec("signature", 5, _BYTES),
    ),
    "blockchain_txn_create_htlc_v1": (
        FieldSpec("payer", 1, _BYTES),
        FieldSpec("payee", 2, _BYTES),
        FieldSpec("address", 3, _BYTES),
        FieldSpec("hashlock", 4, _BYTES),
        FieldSpec("timelock", 5, _UINT64),
        FieldSpec("amount", 6, _UINT64),
        FieldSpec("fee", 7, _UINT64),
        FieldSpec("signature", 8, _BYTES),
        FieldSpec("nonce", 9, _UINT64),
    ),
    "blockchain_txn_redeem_htlc_v1": (
        FieldSpec("payee", 1, _BYTES),
        FieldSpec("address", 2, _BYTES),
        FieldSpec("preimage", 3, _BYTES),
        FieldSpec("fee", 4, _UINT64),
        FieldSpec("signature", 5, _BYTES),
    ),
    "blockchain_txn_oui_v1": (
        FieldSpec("owner", 1, _BYTES),
        FieldSpec("addresses", 2, _BYTES, repeated=True),
        FieldSpec("filter", 3, _BYTES),
        FieldSpec("requested_subnet_size", 4, _UINT32),
        FieldSpec("payer", 5, _BYTES),
        FieldSpec("staking_fee", 6, _UINT64),
        FieldSpec("fee", 7, _UINT64),
        FieldSpec("owner_signature", 8, _BYTES),
        FieldSpec("payer_signature", 9, _BYTES),
        FieldSpec("oui", 10, _UINT64),
    ),
}

# Transaction kind -> (oneof field number in blockchain_txn, message name)
KIND_FIELDS: Final[dict[str, tuple[int, str]]] = {
    "create_htlc": (4, "blockchain_txn_create_htlc_v1"),
    "oui": (7, "blockchain_txn_oui_v1"),
    "redeem_htlc": (11, "blockchain_txn_redeem_htlc_v1"),
    "payment_v2": (21, "blockchain_txn_payment_v2"),
}

_NESTED_MODELS: Final[dict[str, type[BaseModel]]] = {"payment": Payment}

if set(KIND_FIELDS) != set(TXN_KINDS):
    raise RuntimeError(
        "Wire schema and transaction kinds disagree: "
        f"{sorted(set(KIND_FIELDS) ^ set(TXN_KINDS))}"
    )


def _field_proto(spec: FieldSpec) -> descriptor_pb2.FieldDescriptorProto:
    field = _FDP(
        name=spec.name,
        number=spec.number,
        type=spec.type,
        label=_FDP.LABEL_REPEATED if spec.repeated else _FDP.LABEL_OPTIONAL,
    )
    if spec.message is not None:
        field.type_name = f".{PACKAGE}.{spec.message}"
    return field


def _build_file_proto() -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto(
        name="helium_wallet/blockchain_txn.proto",
        package=PACKAGE,
        syntax="proto3",
    )
    for message_name, specs in MESSAGES.items():
        message = file_proto.message_type.add(name=message_name)
        message.field.extend(_field_proto(spec) for spec in specs)

    envelope = file_proto.message_type.add(name=ENVELOPE_MESSAGE)
    envelope.oneof_decl.add(name="txn")
    for kind, (number, message_name) in KIND_FIELDS.items():
        field = _field_proto(FieldSpec(kind, number, _MESSAGE, message=message_name))
        field.oneof_index = 0
        envelope.field.append(field)
    return file_proto


_POOL = descriptor_pool.DescriptorPool()
_POOL.AddSerializedFile(_build_file_proto().SerializeToString())


def message_class(message_name: str) -> type[Message]:
    descriptor = _POOL.FindMessageTypeByName(f"{PACKAGE}.{message_name}")
    return message_factory.GetMessageClass(descriptor)


def _fill(message: Message, message_name: str, model: BaseModel) -> None:
    for spec in MESSAGES[message_name]:
        value = getattr(model, spec.name)
        if spec.repeated and spec.message is not None:
            container = getattr(message, spec.name)
            for item in value:
                _fill(container.add(), spec.message, item)
        elif spec.repeated:
            getattr(message, spec.name).extend(value)
        else:
            setattr(message, spec.name, value)


def _read(message: Message, message_name: str) -> dict[str, Any]:
    data: dict[str, Any] = {}
    for spec in MESSAGES[message_name]:
        value = getattr(message, spec.name)
        if spec.repeated and spec.message is not None:
            nested_cls = _NESTED_MODELS[spec.message]
            data[spec.name] = tuple(
                nested_cls.model_validate(_read(item, spec.message)) for item in value
            )
        elif spec.repeated:
            data[spec.name] = tuple(bytes(item) for item in value)
        else:
            data[spec.name] = value
    return data


def txn_message(txn: TxnBase) -> Message:
    """Build the bare protobuf message for one transaction."""
    kind = getattr(txn, "kind")
    try:
        _, message_name = KIND_FIELDS[kind]
    except KeyError:
        raise EncodingError(f"Unknown transaction kind: {kind!r}") from None
    message = message_class(message_name)()
    try:
        _fill(message, message_name, txn)
    except (TypeError, ValueError) as e:
        raise EncodingError(f"Cannot encode {kind} transaction: {e}") from e
    return message


def encode_txn(txn: TxnBase) -> bytes:
    return txn_message(txn).SerializeToString(deterministic=True)


def encode_envelope(txn: TxnBase) -> bytes:
    envelope = message_class(ENVELOPE_MESSAGE)()
    getattr(envelope, getattr(txn, "kind")).CopyFrom(txn_message(txn))
    return envelope.SerializeToString(deterministic=True)


def decode_envelope(data: bytes) -> TxnModel:
    """Decode a binary ``blockchain_txn`` into its transaction model."""
    envelope = message_class(ENVELOPE_MESSAGE)()
    try:
        envelope.ParseFromString(data)
    except DecodeError as e:
        raise EncodingError(f"Invalid transaction envelope: {e}") from e

    kind = envelope.WhichOneof("txn")
    if kind is None or kind not in TXN_KINDS:
        raise EncodingError("Unknown or missing transaction kind in envelope")
    _, message_name = KIND_FIELDS[kind]
    try:
        return TXN_KINDS[kind].model_validate(  # type: ignore[return-value]
            _read(getattr(envelope, kind), message_name)
        )
    except PydanticValidationError as e:
        raise EncodingError(f"Invalid {kind} transaction: {e}") from e
