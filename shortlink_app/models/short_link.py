from sqlalchemy import Column, Integer, String, Date, DateTime
from sqlalchemy.sql import func
from shortlink_app.database.connection import Base


class ShortLink(Base):
    """
    Durable slug -> URL mapping.
    
    Rows are written once when a link is created and never updated by the
    service; created_at/updated_at are maintained by the database.
    """
    __tablename__ = "url_info"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    original_url = Column(String, nullable=False)
    # unique=True is what resolves two requests racing for the same slug
    slug = Column(String(8), unique=True, nullable=False, index=True)
    # Calendar date only; NULL means the link never expires
    expiration = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<ShortLink slug={self.slug!r} original_url={self.original_url!r}>"
