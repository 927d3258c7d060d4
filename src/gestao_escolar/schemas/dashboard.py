from typing import Literal

from pydantic import BaseModel


class DashboardStats(BaseModel):
    """Aggregate counts shown on the dashboard tiles.

    ``scope`` tells the client whether the numbers cover the whole
    municipality, a single school, or nothing the profile may see.
    """

    scope: Literal["municipality", "school", "none"]
    schools: int
    students: int
    teachers: int
    classes: int
