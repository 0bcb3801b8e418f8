from sqlalchemy import Column, String, DateTime, Boolean
from sqlalchemy.sql import func
from database import Base, JSONDocument
from utils.short_id import generate_short_id

PASSWORD_METHOD = "password"
GOOGLE_METHOD = "google.com"

REQUIRED_PROFILE_FIELDS = ("first_name", "last_name", "phone_number", "address", "location")


class UserAccount(Base):
    __tablename__ = 'users'
    id = Column(String(28), primary_key=True)
    email = Column(String(256), unique=True, index=True, nullable=False)
    display_name = Column(String, nullable=False, default="", server_default="")
    first_name = Column(String, nullable=False, default="", server_default="")
    last_name = Column(String, nullable=False, default="", server_default="")
    phone_number = Column(String, nullable=False, default="", server_default="")
    address = Column(String, nullable=False, default="", server_default="")
    location = Column(String, nullable=False, default="", server_default="")
    photo_url = Column(String, nullable=True)
    profile_complete = Column(Boolean, nullable=False, default=False, server_default='0')
    auth_provider = Column(String(16), nullable=False, default="email")  # "email" or "google"
    user_type = Column(String(16), nullable=True, index=True)  # "brand", "creator" or unset
    categories = Column(JSONDocument, nullable=True)  # list of strings, creators only
    role = Column(String(16), nullable=False, default="USER", server_default="USER")
    password_hash = Column(String(255), nullable=True)
    google_id = Column(String(64), nullable=True, unique=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=func.now(), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, default=func.now(), server_default=func.now(), onupdate=func.now())

    def __init__(self, **kwargs):
        for field in kwargs:
            setattr(self, field, kwargs[field])
        if not getattr(self, 'id', None):
            self.id = generate_short_id(28)

    @property
    def sign_in_methods(self) -> list[str]:
        methods = []
        if self.password_hash:
            methods.append(PASSWORD_METHOD)
        if self.google_id or self.auth_provider == "google":
            methods.append(GOOGLE_METHOD)
        return methods

    def missing_profile_fields(self) -> list[str]:
        return [field for field in REQUIRED_PROFILE_FIELDS if not (getattr(self, field) or "").strip()]

    def to_dict(self):
        return {
            'uid': self.id,
            'email': self.email,
            'displayName': self.display_name,
            'firstName': self.first_name,
            'lastName': self.last_name,
            'phoneNumber': self.phone_number,
            'address': self.address,
            'location': self.location,
            'photoURL': self.photo_url,
            'profileComplete': self.profile_complete,
            'authProvider': self.auth_provider,
            'userType': self.user_type,
            'categories': self.categories or [],
            'role': self.role,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }
