"""Email bodies for account job notifications."""

from ...models import EmailNotification


def account_deleted_email(sender: str, to: str) -> EmailNotification:
    """Confirmation that an account and all of its data are gone."""
    html = """
<h2>Account Deletion Confirmation</h2>
<p>Hello,</p>
<p>This is a confirmation that your BudgetByMe account and all associated data have been successfully deleted from our system.</p>
<p>We're sorry to see you go. If you have any feedback about your experience with BudgetByMe, please feel free to reply to this email.</p>
<p>If you deleted your account by mistake or wish to rejoin in the future, you'll need to create a new account.</p>
<p>Thank you for using BudgetByMe.</p>
"""
    return EmailNotification(
        sender=sender,
        to=to,
        subject="Your account has been deleted",
        html=html,
    )


def export_ready_email(sender: str, to: str, download_url: str, expiry_days: int) -> EmailNotification:
    """Download link for a finished data export."""
    html = f"""
<h2>Your data export is ready</h2>
<p>You requested an export of your expenses data with event information. Your file is now ready for download.</p>
<p><a href="{download_url}">Click here to download your CSV file</a></p>
<p>This link will expire in {expiry_days} days.</p>
"""
    return EmailNotification(
        sender=sender,
        to=to,
        subject="Your data export is ready",
        html=html,
    )
