from sqlalchemy import Column, BigInteger, Integer, String, Boolean, DateTime, Float, JSON, UniqueConstraint
from sqlalchemy.sql import func
from src.database import Base

# ================================
# Stations
# ================================
class Station(Base):
    __tablename__ = "stations"

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False, index=True)
    image = Column(String(500))
    location_type = Column(String(20), nullable=False, default="Point")
    longitude = Column(Float, nullable=False)
    latitude = Column(Float, nullable=False)
    connected_routes = Column(JSON, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    @property
    def coordinates(self):
        """GeoJSON ordering: [longitude, latitude]"""
        return [self.longitude, self.latitude]

# ================================
# Routes
# ================================
class Route(Base):
    __tablename__ = "routes"
    __table_args__ = (
        UniqueConstraint("from_station", "to_station", name="uq_routes_from_to"),
    )

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, index=True)
    from_station = Column(String(255), nullable=False, index=True)
    to_station = Column(String(255), nullable=False, index=True)
    price = Column(Float, nullable=False)
    is_direct_route = Column(Boolean, nullable=False, default=True, index=True)
    intermediate_stations = Column(JSON, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
