"""Public landing content."""
from fastapi import APIRouter
from pydantic import BaseModel

router = APIRouter()


class Feature(BaseModel):
    title: str
    description: str


class HomeResponse(BaseModel):
    """Landing page content."""
    title: str
    tagline: str
    call_to_action: str
    features: list[Feature]


HOME_CONTENT = HomeResponse(
    title="Welcome to EcoGrow",
    tagline="Plant trees, earn rewards, save the planet! 🌍",
    call_to_action="Get Started",
    features=[
        Feature(title="Scan Trees", description="Upload tree photos and get detailed analysis"),
        Feature(title="Earn Rewards", description="Get EcoCoins for every tree you scan"),
        Feature(title="Shop Green", description="Redeem coins for eco-friendly products"),
    ],
)


@router.get("", response_model=HomeResponse)
async def get_home():
    """Landing content; no sign-in required."""
    return HOME_CONTENT
