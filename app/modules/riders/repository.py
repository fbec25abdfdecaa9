# app/modules/riders/repository.py
from sqlalchemy.orm import Session
from typing import List, Dict, Any, Optional
from datetime import datetime

from app.shared.database.models import Rider, User

class RidersRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, rider_id: int) -> Optional[Rider]:
        return self.db.query(Rider).filter(Rider.id == rider_id).first()

    def get_by_email(self, email: str) -> Optional[Rider]:
        return self.db.query(Rider).filter(Rider.email == email).first()

    def create_rider(self, rider_data: Dict[str, Any]) -> Rider:
        rider = Rider(**rider_data)
        self.db.add(rider)
        self.db.commit()
        self.db.refresh(rider)
        return rider

    def list_by_status(
        self,
        status: str,
        district: Optional[str] = None,
        city: Optional[str] = None
    ) -> List[Rider]:
        query = self.db.query(Rider).filter(Rider.status == status)
        if district:
            query = query.filter(Rider.district == district)
        if city:
            query = query.filter(Rider.city == city)
        return query.order_by(Rider.created_at.desc(), Rider.id.desc()).all()

    def update_status(self, rider: Rider, status: str, approved: bool) -> None:
        """Cambia el estado sin confirmar la transacción"""
        rider.status = status
        if approved:
            rider.approved_at = datetime.now()

    def promote_user(self, email: str, role: str) -> bool:
        """Cambia el rol del usuario sin confirmar la transacción"""
        updated = self.db.query(User).filter(User.email == email).update(
            {User.role: role}, synchronize_session=False
        )
        return updated > 0
