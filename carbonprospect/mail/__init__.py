from carbonprospect.mail.client import MailerAuthError, SendGridMailer

__all__ = ["MailerAuthError", "SendGridMailer"]
