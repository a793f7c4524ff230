"""Model to JSON-ready dict conversion with camelCase keys.

Datetimes and decimals are left as Python values; the response encoder
renders them as ISO strings and decimal strings.
"""

from typing import Any

from server.apps.accounts.models import User
from server.apps.circles.models import (
    Circle,
    CircleActivityLog,
    CircleCategory,
    CircleMember,
    File,
    FileShareLink,
    Folder,
)
from server.apps.moderation.models import AdminLog, Announcement
from server.apps.payments.models import PaymentOrder, UserEarnings

JSONDict = dict[str, Any]


def serialize_user(user: User) -> JSONDict:
    """Serialize a user account for ``auth.me`` and admin listings."""
    return {
        'id': user.id,
        'openId': user.open_id,
        'name': user.name,
        'email': user.email,
        'loginMethod': user.login_method,
        'role': user.role,
        'isActive': user.is_active,
        'createdAt': user.date_joined,
        'updatedAt': user.updated_at,
        'lastSignedIn': user.last_signed_in,
    }


def serialize_circle(circle: Circle, include_code: bool = False) -> JSONDict:
    """Serialize a circle.

    ``role`` and ``memberCount`` are added when the queryset annotated
    them. The invitation code is only exposed when asked for.
    """
    data: JSONDict = {
        'id': circle.id,
        'name': circle.name,
        'description': circle.description,
        'creatorId': circle.creator_id,
        'isPublic': circle.is_public,
        'createdAt': circle.created_at,
        'updatedAt': circle.updated_at,
    }
    if include_code:
        data['invitationCode'] = circle.invitation_code
    for attribute, key in (('role', 'role'), ('member_count', 'memberCount')):
        if hasattr(circle, attribute):
            data[key] = getattr(circle, attribute)
    return data


def serialize_member(member: CircleMember) -> JSONDict:
    """Serialize a membership row with the member's name and email.

    Reads ``member.user``; listings load it with ``select_related``.
    """
    return {
        'id': member.id,
        'circleId': member.circle_id,
        'userId': member.user_id,
        'role': member.role,
        'joinedAt': member.joined_at,
        'userName': member.user.name,
        'userEmail': member.user.email,
    }


def serialize_file(
    file_instance: File,
    with_uploader: bool = False,
    with_circle: bool = False,
) -> JSONDict:
    """Serialize a file row.

    Args:
        file_instance: File to serialize.
        with_uploader: Add ``uploaderName``.
        with_circle: Add ``circleName``.

    Returns:
        JSON-ready dict with camelCase keys.
    """
    data: JSONDict = {
        'id': file_instance.id,
        'circleId': file_instance.circle_id,
        'folderId': file_instance.folder_id,
        'uploaderId': file_instance.uploader_id,
        'filename': file_instance.filename,
        'fileKey': file_instance.file_key,
        'fileUrl': file_instance.file_url,
        'mimeType': file_instance.mime_type,
        'fileSize': file_instance.file_size,
        'fileType': file_instance.file_type,
        'isPaid': file_instance.is_paid,
        'price': file_instance.price,
        'uploadedAt': file_instance.uploaded_at,
    }
    if with_uploader:
        data['uploaderName'] = file_instance.uploader.name
    if with_circle:
        data['circleName'] = file_instance.circle.name
    return data


def serialize_folder(folder: Folder) -> JSONDict:
    """Serialize a folder with its creator's name."""
    return {
        'id': folder.id,
        'circleId': folder.circle_id,
        'name': folder.name,
        'description': folder.description,
        'createdBy': folder.created_by_id,
        'creatorName': folder.created_by.name,
        'createdAt': folder.created_at,
        'updatedAt': folder.updated_at,
    }


def serialize_share_link(link: FileShareLink) -> JSONDict:
    """Serialize a share link, including its token and download count."""
    return {
        'id': link.id,
        'fileId': link.file_id,
        'token': link.token,
        'createdBy': link.created_by_id,
        'expiresAt': link.expires_at,
        'downloadCount': link.download_count,
        'createdAt': link.created_at,
    }


def serialize_activity(entry: CircleActivityLog) -> JSONDict:
    """Serialize an activity entry; ``userName`` is None for deleted users."""
    return {
        'id': entry.id,
        'circleId': entry.circle_id,
        'userId': entry.user_id,
        'userName': entry.user.name if entry.user else None,
        'action': entry.action,
        'targetId': entry.target_id,
        'targetType': entry.target_type,
        'details': entry.details,
        'createdAt': entry.created_at,
    }


def serialize_category(tag: CircleCategory) -> JSONDict:
    """Serialize a circle category tag."""
    return {
        'id': tag.id,
        'circleId': tag.circle_id,
        'category': tag.category,
        'createdAt': tag.created_at,
    }


def serialize_announcement(announcement: Announcement) -> JSONDict:
    """Serialize an announcement, draft or published."""
    return {
        'id': announcement.id,
        'title': announcement.title,
        'content': announcement.content,
        'createdBy': announcement.created_by_id,
        'isPublished': announcement.is_published,
        'publishedAt': announcement.published_at,
        'createdAt': announcement.created_at,
        'updatedAt': announcement.updated_at,
    }


def serialize_admin_log(entry: AdminLog) -> JSONDict:
    """Serialize an audit row; ``adminName`` is None for deleted admins."""
    return {
        'id': entry.id,
        'adminId': entry.admin_id,
        'adminName': entry.admin.name if entry.admin else None,
        'action': entry.action,
        'targetUserId': entry.target_user_id,
        'details': entry.details,
        'createdAt': entry.created_at,
    }


def serialize_order(order: PaymentOrder) -> JSONDict:
    """Serialize a payment order with its fixed fee split."""
    return {
        'id': order.id,
        'fileId': order.file_id,
        'buyerId': order.buyer_id,
        'sellerId': order.seller_id,
        'amount': order.amount,
        'platformFee': order.platform_fee,
        'sellerAmount': order.seller_amount,
        'paymentMethod': order.payment_method,
        'status': order.status,
        'transactionId': order.transaction_id,
        'createdAt': order.created_at,
        'completedAt': order.completed_at,
    }


def serialize_earnings(earnings: UserEarnings) -> JSONDict:
    """Serialize a seller's running totals."""
    return {
        'userId': earnings.user_id,
        'totalEarnings': earnings.total_earnings,
        'withdrawnAmount': earnings.withdrawn_amount,
        'availableAmount': earnings.available_amount,
    }
