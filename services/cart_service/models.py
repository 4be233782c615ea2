from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship
from shared.config.database import Base

class CartItem(Base):
    __tablename__ = "cart"
    # One line per (session, product); repeat adds bump the quantity
    __table_args__ = (UniqueConstraint("session_id", "product_id", name="uq_cart_session_product"),)

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(String(128), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)

    product = relationship("Product", lazy="selectin")
