"""
Account workflows built on top of verification codes and password hashes.

Every operation returns an AuthResult; its status_code is the HTTP status
the router should answer with. StoreError is never caught here; a
StoreConflictError from a racing account creation is turned into a 409
or resolved by reading the account that won the race.
"""
import os
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from models.user_account import UserAccount, PASSWORD_METHOD, GOOGLE_METHOD
from services.verification_code_service import CodeIssuer, CodeVerifier, normalize_email
from utils.collection_store import CollectionStore, StoreConflictError
from utils.google_identity import GoogleIdentityError, GoogleSignInNotConfigured, verify_google_id_token
from utils.jwt_auth import create_access_token
from utils.logger_factory import new_logger
from utils.passwords import hash_password, verify_password, MIN_PASSWORD_LENGTH
from utils.short_id import generate_unrecoverable_password

APP_ENV = os.environ.get("APP_ENV", "production").lower()

CODE_SENT = "Verification code sent successfully"
USE_GOOGLE = "Please use Google Sign-In for this account"
NO_USER_FOR_RESET = "No user found with this email address."
PASSWORD_RESET_DONE = "Password has been reset successfully. You can now login with your new password."
BAD_CREDENTIALS = "Invalid email or password"
EMAIL_TAKEN = "An account with this email already exists"
GOOGLE_ID_TAKEN = "This Google account is already linked to another user"
ACCOUNT_LINKED_ELSEWHERE = "This account is linked to a different Google account"

Notifier = Callable[[str, str, str], Any]


@dataclass
class AuthResult:
    success: bool
    valid: Optional[bool] = None
    user: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    message: Optional[str] = None
    is_new_user: Optional[bool] = None
    requires_google_sign_in: Optional[bool] = None
    access_token: Optional[str] = None
    code: Optional[str] = None
    status_code: int = field(default=200, repr=False)

    def to_dict(self) -> Dict[str, Any]:
        body = {
            "success": self.success,
            "valid": self.valid,
            "user": self.user,
            "error": self.error,
            "message": self.message,
            "isNewUser": self.is_new_user,
            "requiresGoogleSignIn": self.requires_google_sign_in,
            "accessToken": self.access_token,
            "tokenType": "bearer" if self.access_token else None,
            "code": self.code,
        }
        return {k: v for k, v in body.items() if v is not None}


def split_name(name: str):
    parts = (name or "").split()
    if not parts:
        return "", ""
    return parts[0], " ".join(parts[1:])


class AuthOrchestrator:
    def __init__(
        self,
        users: CollectionStore[UserAccount],
        issuer: CodeIssuer,
        verifier: CodeVerifier,
        notifier: Optional[Notifier] = None,
        token_factory: Callable[..., str] = create_access_token,
        google_verifier: Optional[Callable[[str], Dict[str, Any]]] = None,
    ):
        self.users = users
        self.issuer = issuer
        self.verifier = verifier
        self.notifier = notifier
        self.token_factory = token_factory
        self.google_verifier = google_verifier or verify_google_id_token

    def find_user_by_email(self, email: str) -> Optional[UserAccount]:
        matches = self.users.query({"email": normalize_email(email)}, limit=1)
        return matches[0] if matches else None

    def _token_for(self, user: UserAccount) -> str:
        return self.token_factory(user.id, user.email, user.role)

    def _signed_in(self, user: UserAccount, is_new_user: bool, status_code: int = 200) -> AuthResult:
        return AuthResult(
            success=True,
            valid=True,
            user=user.to_dict(),
            is_new_user=is_new_user,
            access_token=self._token_for(user),
            status_code=status_code,
        )

    def _issue(self, email: str, purpose: str) -> AuthResult:
        log = new_logger(f"issue_{purpose}_code")
        record = self.issuer.issue(email)
        if self.notifier is not None:
            try:
                self.notifier(record.email, record.code, purpose)
            except Exception as e:
                # The code is stored; the user can request another email
                log.error(f"Failed to dispatch {purpose} email to {record.email}: {e}")
        result = AuthResult(success=True, message=CODE_SENT)
        if APP_ENV == "development":
            result.code = record.code
        return result

    def issue_login_code(self, email: str) -> AuthResult:
        return self._issue(email, "login")

    def issue_reset_code(self, email: str) -> AuthResult:
        return self._issue(email, "reset")

    def verify_and_sign_in(self, email: str, code: str) -> AuthResult:
        log = new_logger("verify_and_sign_in")
        email = normalize_email(email)
        outcome = self.verifier.verify(email, code)
        if not outcome.valid:
            return AuthResult(success=True, valid=False, message=outcome.reason)

        user = self.find_user_by_email(email)
        if user is None:
            try:
                user = self.users.put(UserAccount(
                    email=email,
                    display_name="User",
                    auth_provider="email",
                    profile_complete=False,
                    role="USER",
                    password_hash=hash_password(generate_unrecoverable_password()),
                ))
                log.info(f"Created account {user.id} for {email} from login code")
                return self._signed_in(user, is_new_user=True)
            except StoreConflictError:
                # A concurrent request created the account first
                user = self.find_user_by_email(email)
                if user is None:
                    raise
                log.info(f"Account for {email} was created concurrently, signing in as {user.id}")

        methods = user.sign_in_methods
        if PASSWORD_METHOD not in methods and GOOGLE_METHOD in methods:
            log.info(f"Account {user.id} is Google-only, login code refused")
            return AuthResult(success=True, valid=True, requires_google_sign_in=True, message=USE_GOOGLE)

        log.info(f"Account {user.id} signed in with login code")
        return self._signed_in(user, is_new_user=not user.profile_complete)

    def verify_and_reset_password(self, email: str, code: str, new_password: str) -> AuthResult:
        log = new_logger("verify_and_reset_password")
        email = normalize_email(email)
        outcome = self.verifier.verify(email, code)
        if not outcome.valid:
            return AuthResult(success=True, valid=False, message=outcome.reason)

        user = self.find_user_by_email(email)
        if user is None:
            log.info(f"Password reset for unknown email {email}")
            return AuthResult(success=False, valid=True, error=NO_USER_FOR_RESET, status_code=404)

        self.users.update(user.id, password_hash=hash_password(new_password))
        log.info(f"Password reset for account {user.id}")
        return AuthResult(success=True, valid=True, message=PASSWORD_RESET_DONE)

    def register(self, name: str, email: str, password: str) -> AuthResult:
        log = new_logger("register")
        email = normalize_email(email)
        if len(password or "") < MIN_PASSWORD_LENGTH:
            return AuthResult(success=False, error=f"Password must be at least {MIN_PASSWORD_LENGTH} characters", status_code=422)
        if self.find_user_by_email(email) is not None:
            log.info(f"Registration refused, {email} already exists")
            return AuthResult(success=False, error=EMAIL_TAKEN, status_code=409)

        first_name, last_name = split_name(name)
        try:
            user = self.users.put(UserAccount(
                email=email,
                display_name=(name or "").strip(),
                first_name=first_name,
                last_name=last_name,
                auth_provider="email",
                profile_complete=False,
                role="USER",
                password_hash=hash_password(password),
            ))
        except StoreConflictError:
            log.info(f"Registration for {email} lost a race with another registration")
            return AuthResult(success=False, error=EMAIL_TAKEN, status_code=409)
        log.info(f"Registered account {user.id} for {email}")
        return self._signed_in(user, is_new_user=True, status_code=201)

    def login_with_password(self, email: str, password: str) -> AuthResult:
        log = new_logger("login_with_password")
        user = self.find_user_by_email(email)
        if user is None:
            return AuthResult(success=False, error=BAD_CREDENTIALS, status_code=401)
        if not user.password_hash:
            return AuthResult(success=False, requires_google_sign_in=True, error=USE_GOOGLE, status_code=401)
        if not verify_password(password, user.password_hash):
            log.info(f"Bad password for account {user.id}")
            return AuthResult(success=False, error=BAD_CREDENTIALS, status_code=401)
        return self._signed_in(user, is_new_user=not user.profile_complete)

    def sign_in_with_google(self, id_token: str) -> AuthResult:
        """Sign in with a Google ID token; only claims of a verified token are used."""
        log = new_logger("sign_in_with_google")
        try:
            claims = self.google_verifier(id_token)
        except GoogleSignInNotConfigured as e:
            return AuthResult(success=False, error=str(e), status_code=503)
        except GoogleIdentityError as e:
            return AuthResult(success=False, error=str(e), status_code=401)

        email = normalize_email(claims["email"])
        google_id = claims.get("sub")
        name = claims.get("name") or ""
        photo_url = claims.get("picture")

        linked = self.users.query({"google_id": google_id}, limit=1) if google_id else []
        user = self.find_user_by_email(email)
        if linked and (user is None or linked[0].id != user.id):
            log.warning(f"Google id {google_id} is linked to account {linked[0].id}, refusing sign-in as {email}")
            return AuthResult(success=False, error=GOOGLE_ID_TAKEN, status_code=409)

        if user is None:
            first_name, last_name = split_name(name)
            try:
                user = self.users.put(UserAccount(
                    email=email,
                    display_name=name.strip() or "User",
                    first_name=first_name,
                    last_name=last_name,
                    photo_url=photo_url,
                    auth_provider="google",
                    google_id=google_id,
                    profile_complete=False,
                    role="USER",
                ))
            except StoreConflictError:
                log.info(f"Google account creation for {email} lost a race")
                return AuthResult(success=False, error=EMAIL_TAKEN, status_code=409)
            log.info(f"Created Google account {user.id} for {email}")
            return self._signed_in(user, is_new_user=True)

        if user.google_id and google_id and user.google_id != google_id:
            log.warning(f"Account {user.id} is linked to a different Google id")
            return AuthResult(success=False, error=ACCOUNT_LINKED_ELSEWHERE, status_code=409)

        changes = {}
        if google_id and not user.google_id:
            changes["google_id"] = google_id
        if photo_url and not user.photo_url:
            changes["photo_url"] = photo_url
        if changes:
            user = self.users.update(user.id, **changes)
            log.info(f"Linked Google sign-in to account {user.id}")
        return self._signed_in(user, is_new_user=not user.profile_complete)
