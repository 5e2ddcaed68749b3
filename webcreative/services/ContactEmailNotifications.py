"""
Email notifications for contact form submissions.

Two emails go out per submission: a confirmation to the person who filled
in the form and an alert to the site owner. Both are sent from a background
task, so failures are logged here and never reach the HTTP response.
"""

import html
import logging
from typing import Dict, List, Optional

from webcreative.constants.constants import COMPANY_NAME
from webcreative.schemas.contactSchema import ContactRecord

logger = logging.getLogger(__name__)

CONFIRMATION_SUBJECT = "Recebemos sua mensagem!"
OWNER_ALERT_SUBJECT = "Novo contato pelo site"

CONFIRMATION_TEMPLATE = """
<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <style>
        body {{ font-family: Arial, sans-serif; line-height: 1.6; color: #333; }}
        .container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
        .details {{ background: #f9fafb; padding: 20px; border-radius: 8px; margin: 20px 0; border-left: 4px solid #6d28d9; }}
    </style>
</head>
<body>
    <div class="container">
        <h1>Olá {name},</h1>
        <p>Recebemos sua mensagem e entraremos em contato em breve.</p>
        <p>Detalhes da sua solicitação:</p>
        <div class="details">
            <ul>
                <li><strong>Serviço:</strong> {service_type}</li>
                <li><strong>Mensagem:</strong> {message}</li>
            </ul>
        </div>
        <p>Atenciosamente,<br>Equipe {company}</p>
    </div>
</body>
</html>
"""

OWNER_ALERT_TEMPLATE = """
<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
</head>
<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
    <h1>Novo contato pelo formulário do site</h1>
    <p><strong>Nome:</strong> {name}</p>
    <p><strong>Email:</strong> <a href="mailto:{email}">{email}</a></p>
    <p><strong>Telefone:</strong> {phone}</p>
    <p><strong>Serviço:</strong> {service_type}</p>
    <p><strong>Mensagem:</strong> {message}</p>
    <p style="color:#6b7280;font-size:12px;">Recebido em {submission_date} (UTC) &middot; ID {contact_id}</p>
</body>
</html>
"""


def build_confirmation_email(contact: ContactRecord) -> str:
    """HTML body of the confirmation sent to the submitter."""
    return CONFIRMATION_TEMPLATE.format(
        name=html.escape(contact.name),
        service_type=html.escape(contact.service_type.value),
        message=html.escape(contact.message),
        company=COMPANY_NAME,
    )


def build_owner_alert_email(contact: ContactRecord) -> str:
    """HTML body of the alert sent to the site owner."""
    return OWNER_ALERT_TEMPLATE.format(
        name=html.escape(contact.name),
        email=html.escape(contact.email),
        phone=html.escape(contact.phone) if contact.phone else "Não informado",
        service_type=html.escape(contact.service_type.value),
        message=html.escape(contact.message),
        submission_date=contact.created_at.strftime("%d/%m/%Y %H:%M"),
        contact_id=html.escape(contact.id),
    )


async def notify_contact_received(contact: ContactRecord, mail_client) -> Dict:
    """Send the confirmation email to the submitter."""
    try:
        await mail_client.send_email(
            to_emails=[contact.email],
            subject=CONFIRMATION_SUBJECT,
            body_html=build_confirmation_email(contact),
        )
        return {"status": "sent", "email": contact.email, "type": "contact_confirmation"}
    except Exception as e:
        logger.error(f"⚠️ Failed to send contact confirmation for {contact.id}: {e}")
        return {"status": "failed", "email": contact.email, "type": "contact_confirmation", "error": str(e)}


async def notify_owner_new_contact(contact: ContactRecord, mail_client, owner_email: str) -> Dict:
    """Alert the site owner; replies go straight to the submitter."""
    try:
        await mail_client.send_email(
            to_emails=[owner_email],
            subject=OWNER_ALERT_SUBJECT,
            body_html=build_owner_alert_email(contact),
            reply_to=contact.email,
        )
        return {"status": "sent", "email": owner_email, "type": "owner_contact_alert"}
    except Exception as e:
        logger.error(f"⚠️ Failed to send owner alert for {contact.id}: {e}")
        return {"status": "failed", "email": owner_email, "type": "owner_contact_alert", "error": str(e)}


async def notify_contact_submission(
    contact: ContactRecord,
    mail_client,
    owner_email: Optional[str]
) -> List[Dict]:
    """Send both notifications; one failing does not stop the other."""
    results = [await notify_contact_received(contact, mail_client)]

    if owner_email:
        results.append(await notify_owner_new_contact(contact, mail_client, owner_email))
    else:
        logger.warning("⚠️ No owner email configured, skipping owner alert")

    sent = sum(1 for result in results if result["status"] == "sent")
    logger.info(f"📧 Contact {contact.id}: {sent}/{len(results)} notifications sent")
    return results
