from pydantic import BaseModel
from typing import Any, List, Optional, Tuple

# (filename, file object) as received from the multipart form
ImageFile = Tuple[str, Any]


class Contribution(BaseModel):
    """A rider-submitted route, with optional station photos"""
    start_station: str
    end_station: str
    price: str
    notes: str = ""
    intermediate_stations: List[str] = []
    start_station_image: Optional[ImageFile] = None
    end_station_image: Optional[ImageFile] = None
    intermediate_station_images: List[ImageFile] = []
