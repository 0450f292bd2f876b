"""
Conversation identity.

A conversation is never stored as its own row. It is named by a key built
from the two participants and the context that scopes the chat::

    quotation    <a>_<b>_<quotation_id>
    ad request   <a>_<b>_ad_<ad_request_id>
    connection   <a>_<b>_conn_<connection_id>   or just <a>_<b>
    direct       <a>_<b>_direct

``a`` and ``b`` are the participant ids in lexicographic order, so either
side derives the same string without knowing who is the customer and who is
the vendor. ``ConversationKey`` is the structured form; the string is only
its serialization. Components may not contain the separator and a quotation
id may not be one of the markers, which keeps parsing unambiguous.
"""
import hashlib
from dataclasses import dataclass
from typing import Optional, Tuple

from django.db import models

SEPARATOR = "_"
AD_MARKER = "ad"
CONNECTION_MARKER = "conn"
DIRECT_MARKER = "direct"
RESERVED_MARKERS = frozenset({AD_MARKER, CONNECTION_MARKER, DIRECT_MARKER})


class ConversationKind(models.TextChoices):
    QUOTATION = "quotation", "Quotation"
    AD_REQUEST = "ad_request", "Ad request"
    CONNECTION = "connection", "Vendor connection"
    DIRECT = "direct", "Direct"


class InvalidConversationId(ValueError):
    """Raised when a conversation id or its components are malformed."""


def _check_component(value, label):
    if value is None:
        raise InvalidConversationId(f"{label} is required")
    value = str(value).strip()
    if not value:
        raise InvalidConversationId(f"{label} cannot be empty")
    if SEPARATOR in value:
        raise InvalidConversationId(f"{label} cannot contain '{SEPARATOR}'")
    return value


@dataclass(frozen=True)
class ConversationKey:
    kind: ConversationKind
    participant_a: str
    participant_b: str
    context_id: Optional[str] = None

    def __post_init__(self):
        try:
            kind = ConversationKind(self.kind)
        except ValueError:
            raise InvalidConversationId(f"unknown conversation kind: {self.kind!r}")
        a = _check_component(self.participant_a, "participant id")
        b = _check_component(self.participant_b, "participant id")
        if a == b:
            raise InvalidConversationId("a conversation needs two different participants")
        if a > b:
            a, b = b, a

        context_id = self.context_id
        if kind == ConversationKind.DIRECT:
            if context_id is not None:
                raise InvalidConversationId("direct conversations have no context id")
        elif kind == ConversationKind.CONNECTION and context_id is None:
            pass
        else:
            context_id = _check_component(context_id, "context id")
            if kind == ConversationKind.QUOTATION and context_id in RESERVED_MARKERS:
                raise InvalidConversationId(f"'{context_id}' cannot be used as a quotation id")

        object.__setattr__(self, 'kind', kind)
        object.__setattr__(self, 'participant_a', a)
        object.__setattr__(self, 'participant_b', b)
        object.__setattr__(self, 'context_id', context_id)

    @classmethod
    def for_quotation(cls, user_a, user_b, quotation_id):
        return cls(ConversationKind.QUOTATION, user_a, user_b, quotation_id)

    @classmethod
    def for_ad_request(cls, user_a, user_b, ad_request_id):
        return cls(ConversationKind.AD_REQUEST, user_a, user_b, ad_request_id)

    @classmethod
    def for_connection(cls, user_a, user_b, connection_id=None):
        return cls(ConversationKind.CONNECTION, user_a, user_b, connection_id)

    @classmethod
    def for_direct(cls, user_a, user_b):
        return cls(ConversationKind.DIRECT, user_a, user_b)

    @property
    def participants(self) -> Tuple[str, str]:
        return (self.participant_a, self.participant_b)

    def includes(self, user_id) -> bool:
        return str(user_id) in self.participants

    def other_participant(self, user_id) -> str:
        user_id = str(user_id)
        if user_id == self.participant_a:
            return self.participant_b
        if user_id == self.participant_b:
            return self.participant_a
        raise ValueError(f"{user_id} is not a participant of {self}")

    def serialize(self) -> str:
        parts = [self.participant_a, self.participant_b]
        if self.kind == ConversationKind.QUOTATION:
            parts.append(self.context_id)
        elif self.kind == ConversationKind.AD_REQUEST:
            parts.extend([AD_MARKER, self.context_id])
        elif self.kind == ConversationKind.CONNECTION:
            if self.context_id is not None:
                parts.extend([CONNECTION_MARKER, self.context_id])
        else:
            parts.append(DIRECT_MARKER)
        return SEPARATOR.join(parts)

    def __str__(self):
        return self.serialize()

    @property
    def room_name(self) -> str:
        """
        Channel layer group for this conversation. Group names are limited to
        100 ASCII characters, so the identifier is hashed.
        """
        digest = hashlib.sha1(self.serialize().encode('utf-8')).hexdigest()
        return f"conversation.{digest}"

    @classmethod
    def parse(cls, conversation_id) -> 'ConversationKey':
        if not isinstance(conversation_id, str) or not conversation_id:
            raise InvalidConversationId("conversation id must be a non-empty string")

        parts = conversation_id.split(SEPARATOR)
        if any(not part for part in parts):
            raise InvalidConversationId(f"malformed conversation id: {conversation_id!r}")

        if len(parts) < 2:
            raise InvalidConversationId(f"malformed conversation id: {conversation_id!r}")
        a, b, rest = parts[0], parts[1], parts[2:]

        if not rest:
            return cls.for_connection(a, b)
        if len(rest) == 1:
            marker = rest[0]
            if marker == DIRECT_MARKER:
                return cls.for_direct(a, b)
            if marker in RESERVED_MARKERS:
                raise InvalidConversationId(f"'{marker}' needs a context id: {conversation_id!r}")
            return cls.for_quotation(a, b, marker)
        if len(rest) == 2:
            marker, context_id = rest
            if marker == AD_MARKER:
                return cls.for_ad_request(a, b, context_id)
            if marker == CONNECTION_MARKER:
                return cls.for_connection(a, b, context_id)
        raise InvalidConversationId(f"unrecognized conversation id: {conversation_id!r}")


def derive_conversation_id(participant_a, participant_b, context_id=None, kind=ConversationKind.QUOTATION) -> str:
    """Canonical conversation id; the participant order does not matter."""
    return ConversationKey(kind, participant_a, participant_b, context_id).serialize()


def parse_conversation_id(conversation_id) -> ConversationKey:
    return ConversationKey.parse(conversation_id)
