"""Event marker catalogue and the substring pre-filter.

Only lines containing one of these literal markers cross over to the UI layer.
A typical Game.log of ~20k lines filters down to a few hundred.

Markers are matched as plain, case-sensitive substrings anywhere in the line,
so a fragment like ``"Destruction>"`` also matches ``"<Vehicle Destruction>"``.
"""

from types import MappingProxyType

MARKER_CATEGORIES = MappingProxyType({
    "connection": (
        "AccountLoginCharacterStatus_Character",    # login with character name
    ),
    "inventory": (
        "<RequestLocationInventory>",
        "<EquipItem>",
        "<AttachmentReceived>",
    ),
    "vehicle": (
        "<Vehicle Control Flow>",
        "<[ActorState] Place>",                     # placed in a seat
        "<Quantum Drive Arrived",
        "<Jump Drive Requesting State Change>",
        "Destruction>",                             # partial match
    ),
    "combat": (
        "<Actor Death>",
        "<[ActorState] Dead>",
        "<FatalCollision>",
        "<[STAMINA]",
    ),
    "mission": (
        "<MissionShared>",
        "<ObjectiveUpserted>",
        "<MissionEnded>",
        "<EndMission>",
        "<CLocalMissionPhaseMarker::CreateMarker>", # bounty target spawned
    ),
    "economy": (
        "<CEntityComponentShoppingProvider::SendStandardItemBuyRequest>",
        "<CWallet::ProcessClaimToNextStep>",
    ),
    "location": (
        "<CLandingArea::OnDoorOpenStateChanged>",
        "<CSCItemDockingTube::OnSetTubeState>",
        "<CSCLoadingPlatformManager>",
        "<Spawn Flow>",
        "<CEntity::OnOwnerRemoved>",
    ),
    "system": (
        "<SystemQuit>",
        "<Failed to get starmap route data!>",
    ),
})

EVENT_MARKERS: tuple[str, ...] = tuple(
    marker for markers in MARKER_CATEGORIES.values() for marker in markers
)

LOGIN_MARKER = MARKER_CATEGORIES["connection"][0]


def contains_event_marker(line: str) -> bool:
    """True if any event marker appears in the line."""
    return any(marker in line for marker in EVENT_MARKERS)


def find_marker_category(line: str) -> str | None:
    """Return the category of the first matching marker, or None."""
    for category, markers in MARKER_CATEGORIES.items():
        if any(marker in line for marker in markers):
            return category
    return None
