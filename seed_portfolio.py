#!/usr/bin/env python3
"""
Seed the portfolio with starter images.
Safe to run repeatedly: URLs already present are left alone.
"""

import logging
import sys

from salon_booking import models  # noqa: F401
from salon_booking.database import Base, SessionLocal, engine
from salon_booking.models import PortfolioImage

logger = logging.getLogger("seed_portfolio")

IMAGE_URLS = [
    "https://images.unsplash.com/photo-1604948895053-4449e3863846?q=80&w=2940&auto=format&fit=crop",
    "https://images.unsplash.com/photo-1519014816548-bf5fe059798b?q=80&w=2940&auto=format&fit=crop",
    "https://images.unsplash.com/photo-1604948895163-c28f80a342a3?q=80&w=2940&auto=format&fit=crop",
    "https://images.unsplash.com/photo-1522338242285-15a4d60152c4?q=80&w=2940&auto=format&fit=crop",
    "https://images.unsplash.com/photo-1615875382847-53c5524675b8?q=80&w=2940&auto=format&fit=crop",
    "https://images.unsplash.com/photo-1515699146029-b7b51e5ee50b?q=80&w=2940&auto=format&fit=crop",
]


def seed_portfolio(db, urls=IMAGE_URLS) -> int:
    """Insert missing URLs; returns how many were added"""
    existing = {url for (url,) in db.query(PortfolioImage.url).all()}
    added = 0
    for url in urls:
        if url in existing:
            continue
        db.add(PortfolioImage(url=url))
        existing.add(url)
        added += 1
    db.commit()
    return added


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    logger.info("🌱 Start seeding...")
    Base.metadata.create_all(bind=engine, checkfirst=True)

    db = SessionLocal()
    try:
        added = seed_portfolio(db)
        logger.info(f"✅ Seeding finished ({added} new images)")
        return 0
    except Exception as e:
        db.rollback()
        logger.error(f"❌ Seeding failed: {e}")
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
