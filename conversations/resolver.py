"""
Conversation resolver: turns a conversation id back into the conversation the
chat view needs (type, counterpart, title) by parsing the id and reading the
context record it names.
"""
import logging
from dataclasses import asdict, dataclass, field
from typing import Dict, Optional, Tuple

from marketplace.models import AdRequest, Quotation, VendorConnection
from users.models import User

from .exceptions import ConversationAccessDenied, ConversationLookupError
from .identity import ConversationKey, ConversationKind, InvalidConversationId

logger = logging.getLogger(__name__)


@dataclass
class ResolvedConversation:
    conversation_id: str
    type: str
    context_id: Optional[str]
    participants: Tuple[str, str]
    other_user: Dict
    my_role: str
    title: str
    context: Dict = field(default_factory=dict)

    def to_dict(self):
        data = asdict(self)
        data['participants'] = list(self.participants)
        return data


def parse_or_lookup_error(conversation_id) -> ConversationKey:
    try:
        return ConversationKey.parse(conversation_id)
    except InvalidConversationId as e:
        logger.info("Unresolvable conversation id %r: %s", conversation_id, e)
        raise ConversationLookupError()


def check_access(key: ConversationKey, session):
    if not session.is_admin and not key.includes(session.user_id):
        raise ConversationAccessDenied()


def resolve_conversation(conversation_id, session) -> ResolvedConversation:
    """
    Resolve a conversation id for the given session.

    Raises:
        ConversationLookupError: the id does not parse, or its context record
            is gone or belongs to other users
        ConversationAccessDenied: the caller is neither a participant nor an admin
    """
    key = parse_or_lookup_error(conversation_id)
    check_access(key, session)

    resolver = _RESOLVERS[key.kind]
    return resolver(key, session)


def _my_role(session, vendor_id):
    if session.is_admin:
        return 'admin'
    return 'vendor' if session.user_id == vendor_id else 'customer'


def _counterpart(session, key, vendor):
    """Admins see the vendor side, participants see the other party"""
    if session.is_admin and not key.includes(session.user_id):
        return vendor
    other_id = key.other_participant(session.user_id)
    return User.objects.filter(pk=other_id).first()


def _resolve_quotation(key, session):
    quotation = (
        Quotation.objects
        .select_related('vendor', 'customer', 'service_request')
        .filter(pk=key.context_id)
        .first()
    )
    if quotation is None or quotation.party_ids != set(key.participants):
        raise ConversationLookupError()

    other = _counterpart(session, key, quotation.vendor)
    request = quotation.service_request
    return ResolvedConversation(
        conversation_id=key.serialize(),
        type=ConversationKind.QUOTATION.value,
        context_id=key.context_id,
        participants=key.participants,
        other_user=other.as_participant(),
        my_role=_my_role(session, quotation.vendor_id),
        title=request.title,
        context={
            'quotation': {
                'id': quotation.pk,
                'price': str(quotation.price),
                'status': quotation.status,
            },
            'request': {
                'id': request.pk,
                'title': request.title,
                'category': request.category,
                'location': request.location,
            },
        },
    )


def _resolve_ad_request(key, session):
    ad_request = (
        AdRequest.objects
        .select_related('vendor', 'customer', 'advertisement')
        .filter(pk=key.context_id)
        .first()
    )
    if ad_request is None or ad_request.party_ids != set(key.participants):
        raise ConversationLookupError('Ad request conversation not found')

    other = _counterpart(session, key, ad_request.vendor)
    advertisement = ad_request.advertisement
    return ResolvedConversation(
        conversation_id=key.serialize(),
        type=ConversationKind.AD_REQUEST.value,
        context_id=key.context_id,
        participants=key.participants,
        other_user=other.as_participant(),
        my_role=_my_role(session, ad_request.vendor_id),
        title=advertisement.title,
        context={
            'ad_request': {
                'id': ad_request.pk,
                'status': ad_request.status,
            },
            'advertisement': {
                'id': advertisement.pk,
                'title': advertisement.title,
                'category': advertisement.category,
                'service_area': advertisement.service_area,
            },
        },
    )


def _resolve_connection(key, session):
    connections = VendorConnection.objects.select_related('requester', 'receiver')
    if key.context_id is not None:
        connection = connections.filter(pk=key.context_id).first()
    else:
        pairs = connections.between(*key.participants)
        connection = pairs.connected().order_by('-updated_at').first() or pairs.order_by('-updated_at').first()

    if connection is None or connection.party_ids != set(key.participants):
        raise ConversationLookupError('Connection not found')

    other = _counterpart(session, key, connection.receiver)
    return ResolvedConversation(
        conversation_id=key.serialize(),
        type=ConversationKind.CONNECTION.value,
        context_id=connection.pk,
        participants=key.participants,
        other_user=other.as_participant(),
        my_role='admin' if session.is_admin else 'vendor',
        title=f"Network chat with {other.display_name}",
        context={
            'connection_id': connection.pk,
            'status': connection.status,
        },
    )


def _resolve_direct(key, session):
    users = {u.pk: u for u in User.objects.filter(pk__in=key.participants)}
    if len(users) != 2:
        raise ConversationLookupError('User not found')

    if key.includes(session.user_id):
        other = users[key.other_participant(session.user_id)]
        my_role = session.role
    else:
        other = next((u for u in users.values() if u.role == 'vendor'), users[key.participant_b])
        my_role = 'admin'

    return ResolvedConversation(
        conversation_id=key.serialize(),
        type=ConversationKind.DIRECT.value,
        context_id=None,
        participants=key.participants,
        other_user=other.as_participant(),
        my_role=my_role,
        title=other.display_name,
    )


_RESOLVERS = {
    ConversationKind.QUOTATION: _resolve_quotation,
    ConversationKind.AD_REQUEST: _resolve_ad_request,
    ConversationKind.CONNECTION: _resolve_connection,
    ConversationKind.DIRECT: _resolve_direct,
}
