"""
User Model - Stores registered identities.

An identity is created by registration and never edited afterwards. The password
is only ever stored as a salted bcrypt hash.
"""
from sqlalchemy import Column, Integer, String, DateTime, func
from ..database import Base

class User(Base):
    """
    User Model - A registered identity capable of owning records
    
    Fields:
    - id: Primary key
    - name: Display name
    - email: Unique login email
    - password_hash: Salted bcrypt hash of the password
    - created_at: When the identity registered
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        """String representation of the User model"""
        return f"<User(id={self.id}, email='{self.email}')>"
