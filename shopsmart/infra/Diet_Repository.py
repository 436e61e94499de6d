import logging
from typing import Dict, List

from shopsmart.domain.DietPlan import DietPlan
from shopsmart.domain.exceptions import ProfileError
from shopsmart.infra.Document_Store import DocumentStore
from shopsmart.utilities.constants import DEFAULT_PROFILE_ID, DIET_PLANS_ROOT, FORBIDDEN_ID_CHARS

logger = logging.getLogger(__name__)


def _plan_path(profile_id: str) -> str:
    return f"{DIET_PLANS_ROOT}/{profile_id}"


def _validate_profile_id(profile_id: str) -> str:
    clean = (profile_id or '').strip()
    if not clean or any(ch in clean for ch in FORBIDDEN_ID_CHARS):
        raise ProfileError(profile_id, f"Invalid profile id: {profile_id!r}")
    return clean


class DietRepository:
    def __init__(self, store: DocumentStore):
        self.store = store

    def list_profile_ids(self) -> List[str]:
        """Stored profile ids, the default profile always first."""
        raw = self.store.get(DIET_PLANS_ROOT) or {}
        ids = [pid for pid in raw.keys() if pid != DEFAULT_PROFILE_ID] if isinstance(raw, dict) else []
        return [DEFAULT_PROFILE_ID, *ids]

    def load_all_profiles(self) -> Dict[str, DietPlan]:
        raw = self.store.get(DIET_PLANS_ROOT) or {}
        if not isinstance(raw, dict):
            logger.warning("Unexpected diet plans payload of type %s; ignoring", type(raw).__name__)
            return {}
        return {pid: DietPlan.from_dict(data) for pid, data in raw.items()}

    def load_diet_plan(self, profile_id: str) -> DietPlan:
        """Read a profile's plan; a missing plan is created empty and persisted."""
        profile_id = _validate_profile_id(profile_id)
        raw = self.store.get(_plan_path(profile_id))
        if raw is None:
            plan = DietPlan()
            self.save_diet_plan(profile_id, plan)
            logger.info("Created empty diet plan for profile %s", profile_id)
            return plan
        return DietPlan.from_dict(raw)

    def save_diet_plan(self, profile_id: str, plan: DietPlan) -> None:
        profile_id = _validate_profile_id(profile_id)
        self.store.set(_plan_path(profile_id), plan.to_dict())

    def delete_profile(self, profile_id: str) -> None:
        profile_id = _validate_profile_id(profile_id)
        if profile_id == DEFAULT_PROFILE_ID:
            raise ProfileError(profile_id, f"The default profile '{DEFAULT_PROFILE_ID}' cannot be deleted")
        self.store.remove(_plan_path(profile_id))
