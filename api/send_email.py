import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
import os
import time

from utils.logger_factory import new_logger

PURPOSE_COPY = {
    "login": ("Your Creator Marketplace Sign-In Code", "Enter this code in the app to continue signing in."),
    "reset": ("Your Creator Marketplace Password Reset Code", "Enter this code in the app to choose a new password."),
}


def smtp_configured() -> bool:
    return bool(os.environ.get("EMAIL_SERVER_USER") and os.environ.get("EMAIL_SERVER_PASS"))


def send_verification_email(to_email: str, code: str, purpose: str = "login"):
    log = new_logger("send_verification_email")
    if not smtp_configured():
        log.warning(f"SMTP is not configured, skipping {purpose} email to {to_email}")
        return False

    from_email = os.environ.get("EMAIL_SERVER_USER")
    password = os.environ.get("EMAIL_SERVER_PASS")
    smtp_server = os.environ.get("EMAIL_SERVER_HOST", "smtp.gmail.com")
    smtp_port = int(os.environ.get("EMAIL_SERVER_PORT", 587))
    subject, instruction = PURPOSE_COPY.get(purpose, PURPOSE_COPY["login"])

    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = os.environ.get("EMAIL_FROM") or from_email
    msg["To"] = to_email
    # Cache-bust the logo so image proxies don't serve an old version
    logo_base = (os.environ.get("WEBAPP_URL") or "http://localhost:3000")
    logo_src = f"{logo_base}/logo.png?v={int(time.time())}"

    text_part = f"""
{subject}

Code: {code}

{instruction}
The code expires in 15 minutes.
If you didn't request this, you can safely ignore this email.
"""

    # Table-based HTML renders consistently across the common webmail clients
    html = f"""
<!DOCTYPE html>
<html>
  <head>
    <meta http-equiv="Content-Type" content="text/html; charset=utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{subject}</title>
  </head>
  <body style="margin:0; padding:0; background-color:#f6f7f9;">
    <div style="display:none; font-size:1px; color:#f6f7f9; line-height:1px; max-height:0; max-width:0; opacity:0; overflow:hidden;">Your verification code is {code}.</div>
    <table role="presentation" cellpadding="0" cellspacing="0" border="0" width="100%" style="background-color:#f6f7f9;">
      <tr>
        <td align="center" style="padding:24px 12px;">
          <table role="presentation" cellpadding="0" cellspacing="0" border="0" width="480" style="width:480px; max-width:480px; background-color:#ffffff; border:1px solid #eeeeee; border-radius:16px;">
            <tr>
              <td align="center" style="padding:20px 16px;">
                <img src="{logo_src}" alt="Creator Marketplace" width="200" style="display:block; border:0; width:200px; height:auto;" />
              </td>
            </tr>
            <tr>
              <td align="center" style="padding:8px 24px 16px 24px;">
                <div style="font-family:Arial, sans-serif; font-size:40px; letter-spacing:8px; color:#7c3aed; font-weight:700;">{code}</div>
              </td>
            </tr>
            <tr>
              <td align="center" style="padding:0 24px 24px 24px;">
                <div style="font-family:Arial, sans-serif; font-size:16px; color:#374151;">{instruction}</div>
                <div style="font-family:Arial, sans-serif; font-size:14px; color:#6b7280; padding-top:16px;">The code expires in 15 minutes. If you didn't request this, you can safely ignore this email.</div>
              </td>
            </tr>
          </table>
        </td>
      </tr>
    </table>
  </body>
</html>
"""

    # Text first, then HTML (some clients pick the first alternative)
    msg.attach(MIMEText(text_part, "plain"))
    msg.attach(MIMEText(html, "html"))

    with smtplib.SMTP(smtp_server, smtp_port) as server:
        server.starttls()
        server.login(from_email, password)
        server.sendmail(from_email, to_email, msg.as_string())
    log.info(f"Sent {purpose} email to {to_email}")
    return True


def dispatch_verification_email(to_email: str, code: str, purpose: str = "login"):
    """Background-task entry point: a failed send is logged, never raised."""
    log = new_logger("dispatch_verification_email")
    try:
        send_verification_email(to_email, code, purpose)
    except Exception as e:
        log.error(f"Failed to send {purpose} email to {to_email}: {e}")
