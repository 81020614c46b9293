from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from app.core.database import Base

NOT_ADDED = "Not Added"


class User(Base):
    """
    A campus member. Accounts are created by the identity provider;
    this table only mirrors the profile fields the app shows.
    """
    __tablename__ = "users"

    id = Column(String(255), primary_key=True, index=True)

    name = Column(String(255), nullable=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    image = Column(String(255), nullable=True)

    enrollment_no = Column(String(12), nullable=False, default=NOT_ADDED)
    degree = Column(String(255), nullable=False, default=NOT_ADDED)
    year_of_study = Column(String(255), nullable=False, default=NOT_ADDED)
    department = Column(String(255), nullable=False, default=NOT_ADDED)

    registrations = relationship(
        "EventRegistration",
        back_populates="member",
        cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "image": self.image,
            "enrollmentNo": self.enrollment_no,
            "degree": self.degree,
            "yearOfStudy": self.year_of_study,
            "department": self.department,
        }
