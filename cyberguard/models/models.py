# cyberguard/models/models.py
from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from sqlalchemy import String, Text, DateTime, ForeignKey, func, select
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship, selectinload
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from cyberguard.models.schemas import (
    AssetIn,
    AssetOut,
    AssetType,
    AssetUpdate,
    WeaknessIn,
    WeaknessOut,
    WeaknessUpdate,
)
from cyberguard.utils.logger import get_logger


logger = get_logger(__name__)


class Base(DeclarativeBase):
    pass


class AssetRecord(Base):
    __tablename__ = "assets"
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(256))
    type: Mapped[str] = mapped_column(String(32), index=True)
    description: Mapped[str] = mapped_column(Text())
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    weaknesses: Mapped[List["WeaknessRecord"]] = relationship(
        back_populates="asset",
        cascade="all, delete-orphan",
        order_by="WeaknessRecord.id",
    )


class WeaknessRecord(Base):
    __tablename__ = "weaknesses"
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    asset_id: Mapped[int] = mapped_column(
        ForeignKey("assets.id", ondelete="CASCADE"), index=True
    )
    description: Mapped[str] = mapped_column(Text())
    severity: Mapped[str] = mapped_column(String(16))
    asset: Mapped[AssetRecord] = relationship(back_populates="weaknesses")


class AssetNotFound(LookupError):
    def __init__(self, asset_id: int):
        super().__init__(f"Asset {asset_id} not found")
        self.asset_id = asset_id


class WeaknessNotFound(LookupError):
    def __init__(self, asset_id: int, weakness_id: int):
        super().__init__(f"Weakness {weakness_id} not found on asset {asset_id}")
        self.asset_id = asset_id
        self.weakness_id = weakness_id


def _weakness_out(w: WeaknessRecord) -> WeaknessOut:
    return WeaknessOut(
        id=w.id, asset_id=w.asset_id, description=w.description, severity=w.severity
    )


def _asset_out(a: AssetRecord) -> AssetOut:
    return AssetOut(
        id=a.id,
        name=a.name,
        type=a.type,
        description=a.description,
        weaknesses=[_weakness_out(w) for w in a.weaknesses],
    )


class ModelDB:
    """SQLAlchemy Async Engine untuk registry aset (non-blocking DB access)."""

    def __init__(self, db_url: str, echo: bool = False):
        self.db_url = db_url
        self._initialized = False

        engine_kwargs = {"echo": echo}
        if ":memory:" in db_url:
            # satu koneksi bersama, kalau tidak tiap koneksi dapat DB kosong sendiri
            engine_kwargs.update(
                poolclass=StaticPool, connect_args={"check_same_thread": False}
            )

        try:
            self._engine = create_async_engine(self.db_url, **engine_kwargs)
            self.Session = async_sessionmaker(
                bind=self._engine,
                class_=AsyncSession,
                expire_on_commit=False,
            )
            logger.info("ModelDB initialized with DB: %s", self.db_url)
        except SQLAlchemyError as e:
            logger.error("Gagal inisialisasi database: %s", e)
            raise

    async def init_models(self) -> None:
        """Init DB sekali dan buat tabel jika belum ada."""
        if self._initialized:
            return
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        self._initialized = True

    async def dispose(self) -> None:
        await self._engine.dispose()

    # * --------------------------------------------------
    # * asset registry
    # * --------------------------------------------------
    async def _get_asset(self, s: AsyncSession, asset_id: int) -> AssetRecord:
        result = await s.execute(
            select(AssetRecord)
            .options(selectinload(AssetRecord.weaknesses))
            .where(AssetRecord.id == asset_id)
        )
        asset = result.scalars().first()
        if asset is None:
            raise AssetNotFound(asset_id)
        return asset

    async def list_assets(self, asset_type: Optional[AssetType] = None) -> List[AssetOut]:
        stmt = (
            select(AssetRecord)
            .options(selectinload(AssetRecord.weaknesses))
            .order_by(AssetRecord.id)
        )
        if asset_type is not None:
            stmt = stmt.where(AssetRecord.type == AssetType(asset_type).value)
        async with self.Session() as s:
            rows = (await s.execute(stmt)).scalars().all()
            return [_asset_out(a) for a in rows]

    async def get_asset(self, asset_id: int) -> AssetOut:
        async with self.Session() as s:
            return _asset_out(await self._get_asset(s, asset_id))

    async def create_asset(self, data: AssetIn) -> AssetOut:
        async with self.Session() as s:
            try:
                asset = AssetRecord(
                    name=data.name, type=data.type.value, description=data.description
                )
                s.add(asset)
                await s.commit()
            except SQLAlchemyError:
                await s.rollback()
                logger.exception("Gagal simpan aset %s", data.name)
                raise
            asset_id = asset.id
        logger.info("Aset dibuat | id=%s type=%s", asset_id, data.type.value)
        return await self.get_asset(asset_id)

    async def update_asset(self, asset_id: int, data: AssetUpdate) -> AssetOut:
        changes = data.model_dump(exclude_none=True)
        async with self.Session() as s:
            asset = await self._get_asset(s, asset_id)
            for key, value in changes.items():
                setattr(asset, key, value.value if key == "type" else value)
            try:
                await s.commit()
            except SQLAlchemyError:
                await s.rollback()
                logger.exception("Gagal update aset %s", asset_id)
                raise
        return await self.get_asset(asset_id)

    async def delete_asset(self, asset_id: int) -> None:
        async with self.Session() as s:
            asset = await self._get_asset(s, asset_id)
            await s.delete(asset)
            await s.commit()
        logger.info("Aset dihapus | id=%s", asset_id)

    # * --------------------------------------------------
    # * weaknesses
    # * --------------------------------------------------
    async def add_weakness(self, asset_id: int, data: WeaknessIn) -> WeaknessOut:
        async with self.Session() as s:
            await self._get_asset(s, asset_id)
            weakness = WeaknessRecord(
                asset_id=asset_id,
                description=data.description,
                severity=data.severity.value,
            )
            s.add(weakness)
            await s.commit()
            return _weakness_out(weakness)

    async def _get_weakness(
        self, s: AsyncSession, asset_id: int, weakness_id: int
    ) -> WeaknessRecord:
        await self._get_asset(s, asset_id)
        result = await s.execute(
            select(WeaknessRecord).where(
                WeaknessRecord.id == weakness_id, WeaknessRecord.asset_id == asset_id
            )
        )
        weakness = result.scalars().first()
        if weakness is None:
            raise WeaknessNotFound(asset_id, weakness_id)
        return weakness

    async def update_weakness(
        self, asset_id: int, weakness_id: int, data: WeaknessUpdate
    ) -> WeaknessOut:
        async with self.Session() as s:
            weakness = await self._get_weakness(s, asset_id, weakness_id)
            if data.description is not None:
                weakness.description = data.description
            if data.severity is not None:
                weakness.severity = data.severity.value
            await s.commit()
            return _weakness_out(weakness)

    async def delete_weakness(self, asset_id: int, weakness_id: int) -> None:
        async with self.Session() as s:
            weakness = await self._get_weakness(s, asset_id, weakness_id)
            await s.delete(weakness)
            await s.commit()
