from pydantic import BaseModel

class ComponentLink(BaseModel):
    """A component page discovered on the overview page."""
    url: str
    title: str
