"""Portfolio repository - Database operations for portfolio images"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import PortfolioImage


class PortfolioRepository:
    """Repository for portfolio image database operations"""

    @staticmethod
    def list_images(db: Session) -> list[PortfolioImage]:
        """All portfolio images, newest first"""
        return (
            db.query(PortfolioImage)
            .order_by(PortfolioImage.created_at.desc(), PortfolioImage.id.desc())
            .all()
        )

    @staticmethod
    def get_image_by_url(db: Session, url: str) -> Optional[PortfolioImage]:
        return db.query(PortfolioImage).filter(PortfolioImage.url == url).first()

    @staticmethod
    def create_image(db: Session, url: str) -> PortfolioImage:
        image = PortfolioImage(url=url)
        db.add(image)
        db.commit()
        db.refresh(image)
        return image

    @staticmethod
    def delete_image(db: Session, image: PortfolioImage) -> None:
        """Flushes the delete; the caller commits"""
        db.delete(image)
        db.flush()
