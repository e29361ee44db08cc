import smtplib
import ssl
import logging
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from html import escape
from typing import List, Optional
from connext.core.config import settings

logger = logging.getLogger(__name__)


class EmailService:
    def __init__(self):
        self.smtp_server = settings.SMTP_SERVER
        self.smtp_port = settings.SMTP_PORT
        self.username = settings.SMTP_USERNAME
        self.password = settings.SMTP_PASSWORD
        self.from_email = settings.FROM_EMAIL
        self.from_name = settings.FROM_NAME

    def send_email(
        self,
        to_emails: List[str],
        subject: str,
        html_content: str,
        text_content: Optional[str] = None,
    ) -> bool:
        """Send email over SMTP with STARTTLS"""

        if not settings.SEND_EMAILS:
            logger.info(f"Email sending disabled. Would send: {subject} to {to_emails}")
            return True

        try:
            message = MIMEMultipart("alternative")
            message["Subject"] = subject
            message["From"] = f"{self.from_name} <{self.from_email}>"
            message["To"] = ", ".join(to_emails)

            if text_content:
                message.attach(MIMEText(text_content, "plain"))
            message.attach(MIMEText(html_content, "html"))

            context = ssl.create_default_context()

            with smtplib.SMTP(self.smtp_server, self.smtp_port, timeout=settings.EMAIL_TIMEOUT) as server:
                server.starttls(context=context)
                if self.username:
                    server.login(self.username, self.password)
                server.sendmail(self.from_email, to_emails, message.as_string())

            logger.info(f"Email sent successfully to {to_emails}")
            return True

        except (smtplib.SMTPException, OSError):
            logger.exception(f"Failed to send email '{subject}' to {to_emails}")
            return False

    def send_expert_invitation_email(
        self,
        expert_name: str,
        expert_email: str,
        project_name: str,
        client_name: str,
        invitation_url: str,
        industry: Optional[str] = None,
        vetting_questions_count: int = 0,
    ) -> bool:
        """Invite an expert to respond to a project."""
        screening = ""
        if vetting_questions_count > 0:
            plural = "s" if vetting_questions_count > 1 else ""
            screening = (
                f"There are {vetting_questions_count} screening question{plural} "
                f"to help us understand your expertise."
            )
        industry_html = ""
        if industry:
            industry_html = f"""
                    <p style="margin: 0 0 8px; font-size: 14px; color: #666;">INDUSTRY</p>
                    <p style="margin: 0; font-size: 16px; color: #333;">{escape(industry)}</p>"""

        html_content = f"""
        <!DOCTYPE html>
        <html>
        <head>
            <meta charset="utf-8">
            <title>Project Invitation - {escape(self.from_name)}</title>
            <style>
                body {{ font-family: Arial, sans-serif; margin: 0; padding: 20px; background-color: #f5f5f5; }}
                .container {{ max-width: 600px; margin: 0 auto; background-color: white; padding: 30px; border-radius: 8px; }}
                .details {{ background-color: #f8f9fa; border-radius: 6px; padding: 20px; margin: 24px 0; }}
                .button {{ display: inline-block; background-color: #0066cc; color: white; padding: 14px 32px; text-decoration: none; border-radius: 6px; }}
                .footer {{ margin-top: 30px; padding-top: 20px; border-top: 1px solid #eaeaea; color: #888; font-size: 13px; }}
            </style>
        </head>
        <body>
            <div class="container">
                <h1>{escape(self.from_name)}</h1>
                <p>Hello {escape(expert_name)},</p>
                <p>You have been invited to participate in a new project opportunity through {escape(self.from_name)}.</p>
                <div class="details">
                    <p style="margin: 0 0 12px; font-size: 14px; color: #666;">PROJECT</p>
                    <p style="margin: 0 0 16px; font-size: 18px; font-weight: 600;">{escape(project_name)}</p>
                    <p style="margin: 0 0 8px; font-size: 14px; color: #666;">CLIENT</p>
                    <p style="margin: 0 0 16px; font-size: 16px; color: #333;">{escape(client_name)}</p>{industry_html}
                </div>
                <p>Please review the project details and let us know if you're interested in participating. {screening}</p>
                <p style="text-align: center;"><a href="{invitation_url}" class="button">View Project &amp; Respond</a></p>
                <p style="font-size: 14px; color: #666;">Or copy and paste this link into your browser:</p>
                <p style="font-size: 14px; color: #0066cc; word-break: break-all;">{invitation_url}</p>
                <div class="footer">
                    <p>This invitation was sent by {escape(self.from_name)} Expert Network.</p>
                    <p>If you have any questions, please contact us at {escape(self.from_email)}</p>
                </div>
            </div>
        </body>
        </html>
        """

        text_content = f"""
Hello {expert_name},

You have been invited to participate in a new project opportunity through {self.from_name}.

PROJECT: {project_name}
CLIENT: {client_name}
{f"INDUSTRY: {industry}" if industry else ""}

Please review the project details and let us know if you're interested in participating.
{screening}

View Project & Respond: {invitation_url}

---
This invitation was sent by {self.from_name} Expert Network.
If you have any questions, please contact us at {self.from_email}
        """

        return self.send_email(
            [expert_email],
            f"Project Invitation: {project_name}",
            html_content,
            text_content,
        )

    def send_employee_welcome_email(self, email: str, full_name: str, temp_password: str) -> bool:
        """Send login details to a newly created employee account."""
        login_url = f"{settings.frontend_url}/login"
        html_content = f"""
        <!DOCTYPE html>
        <html>
        <head><meta charset="utf-8"><title>Your {escape(self.from_name)} account</title></head>
        <body style="font-family: Arial, sans-serif; background-color: #f5f5f5; padding: 20px;">
            <div style="max-width: 600px; margin: 0 auto; background-color: white; padding: 30px; border-radius: 8px;">
                <p>Dear {escape(full_name)},</p>
                <p>An account has been created for you on the {escape(self.from_name)} platform.</p>
                <p><strong>Email:</strong> {escape(email)}<br>
                   <strong>Temporary password:</strong> {escape(temp_password)}</p>
                <p>You will be asked to choose a new password the first time you sign in.</p>
                <p><a href="{login_url}">{login_url}</a></p>
            </div>
        </body>
        </html>
        """
        text_content = (
            f"Dear {full_name},\n\n"
            f"An account has been created for you on the {self.from_name} platform.\n"
            f"Email: {email}\nTemporary password: {temp_password}\n\n"
            f"You will be asked to choose a new password the first time you sign in.\n{login_url}\n"
        )
        return self.send_email([email], f"Your {self.from_name} account", html_content, text_content)


email_service = EmailService()
