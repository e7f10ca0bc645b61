"""
Criterion Repository

Registry of the criteria known to the system, kept in registration order.
"""
from typing import List, Optional, Sequence

from sqlalchemy import select, func

from database.models import CriterionRecord
from .base import BaseRepository


class CriterionRepository(BaseRepository[CriterionRecord]):
    """Repository for the criterion registry."""
    
    model = CriterionRecord
    
    async def list_ordered(self) -> Sequence[CriterionRecord]:
        """All registered criteria in registration order."""
        stmt = select(CriterionRecord).order_by(CriterionRecord.position, CriterionRecord.id)
        result = await self.session.execute(stmt)
        return result.scalars().all()
    
    async def get_field_keys(self) -> List[str]:
        """Field keys of all registered criteria, in registration order."""
        return [c.id for c in await self.list_ordered()]
    
    async def register(
        self,
        field_key: str,
        name: Optional[str] = None,
        definition: Optional[str] = None,
        data_sources: Optional[List[str]] = None,
        generated: bool = False,
    ) -> CriterionRecord:
        """
        Add a criterion to the registry, or update it if already known.
        
        Re-registering keeps the original position.
        """
        record = await self.get(field_key)
        
        if record is not None:
            if name is not None:
                record.name = name
            if definition is not None:
                record.definition = definition
            if data_sources is not None:
                record.data_sources = list(data_sources)
            record.generated = record.generated or generated
            record.updated_at = self.now()
            await self.session.flush()
            return record
        
        stmt = select(func.coalesce(func.max(CriterionRecord.position), -1))
        result = await self.session.execute(stmt)
        next_position = result.scalar_one() + 1
        
        record = CriterionRecord(
            id=field_key,
            name=name or field_key,
            definition=definition,
            data_sources=list(data_sources or []),
            generated=generated,
            position=next_position,
        )
        return await self.add(record)
