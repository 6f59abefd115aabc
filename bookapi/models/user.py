from sqlalchemy import Column, String, JSON

from bookapi.models.base_model import Base, BaseModel


class User(BaseModel, Base):
    __tablename__ = "users"
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    roles = Column(JSON, nullable=False, default=lambda: ["user"])

    @property
    def password(self):
        raise AttributeError("Password: Write-only field")

