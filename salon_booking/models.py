from sqlalchemy import JSON, Column, Date, DateTime, Float, Integer, String
from sqlalchemy.sql import func

from .database import Base


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    booking_date = Column(Date, index=True, nullable=False)
    start_time = Column(String(5), nullable=False)  # HH:MM, 24h
    duration_minutes = Column(Integer, nullable=False)
    client_name = Column(String(255), nullable=False)
    client_phone = Column(String(50), nullable=False)  # E.164, e.g. +5573981067554
    services = Column(JSON, default=list, nullable=False)  # Service names as booked
    total_cost = Column(Float, nullable=False)
    inspiration_url = Column(String(1000), nullable=True)  # Public blob URL
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class PortfolioImage(Base):
    __tablename__ = "portfolio_images"

    id = Column(Integer, primary_key=True, index=True)
    url = Column(String(1000), unique=True, index=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
