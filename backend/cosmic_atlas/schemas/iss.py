from typing import List

from pydantic import BaseModel


class ISSPosition(BaseModel):
    latitude: float
    longitude: float
    altitude: float
    velocity: float
    timestamp: int


class Astronaut(BaseModel):
    name: str
    craft: str


class AstronautRoster(BaseModel):
    number: int = 0
    people: List[Astronaut] = []
