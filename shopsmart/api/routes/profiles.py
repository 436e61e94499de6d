"""Diet profile endpoints. Every mutation recomputes the shared shopping list."""
import logging
from fastapi import APIRouter, Depends, HTTPException

from shopsmart.api.dependencies import get_diet_repository, get_shopping_repository
from shopsmart.infra.Diet_Repository import DietRepository
from shopsmart.infra.Shopping_Repository import ShoppingRepository
from shopsmart.logic.shopping.service import delete_profile_and_recompute, save_diet_plan_and_recompute
from shopsmart.utilities.constants import DEFAULT_PROFILE_ID
from shopsmart.utilities.validators import DayTypeCreateInput, DietPlanInput

router = APIRouter()
logger = logging.getLogger(__name__)


def _plan_response(profile_id, plan, result=None):
    body = {
        "profile_id": profile_id,
        "plan": plan.to_dict(),
        "usage": plan.usage_counts(),
    }
    if result is not None:
        body["shopping_list"] = result.to_dict()
    return body


@router.get('/api/profiles')
def list_profiles(diet_repo: DietRepository = Depends(get_diet_repository)):
    return {"profiles": diet_repo.list_profile_ids(), "default": DEFAULT_PROFILE_ID}


@router.get('/api/profiles/{profile_id}/diet')
def get_diet(profile_id: str, diet_repo: DietRepository = Depends(get_diet_repository)):
    plan = diet_repo.load_diet_plan(profile_id)
    return _plan_response(profile_id, plan)


@router.put('/api/profiles/{profile_id}/diet')
def save_diet(profile_id: str, payload: DietPlanInput,
              diet_repo: DietRepository = Depends(get_diet_repository),
              shopping_repo: ShoppingRepository = Depends(get_shopping_repository)):
    plan = payload.to_domain()
    result = save_diet_plan_and_recompute(profile_id, plan, diet_repo, shopping_repo)
    logger.info("Saved diet plan for %s (%d day types)", profile_id, len(plan.day_types))
    return _plan_response(profile_id, plan, result)


@router.delete('/api/profiles/{profile_id}')
def delete_profile(profile_id: str,
                   diet_repo: DietRepository = Depends(get_diet_repository),
                   shopping_repo: ShoppingRepository = Depends(get_shopping_repository)):
    result = delete_profile_and_recompute(profile_id, diet_repo, shopping_repo)
    return {"deleted": profile_id, "shopping_list": result.to_dict()}


@router.post('/api/profiles/{profile_id}/day-types', status_code=201)
def add_day_type(profile_id: str, payload: DayTypeCreateInput,
                 diet_repo: DietRepository = Depends(get_diet_repository),
                 shopping_repo: ShoppingRepository = Depends(get_shopping_repository)):
    plan = diet_repo.load_diet_plan(profile_id)
    day_type = plan.add_day_type(payload.name)
    save_diet_plan_and_recompute(profile_id, plan, diet_repo, shopping_repo)
    return {"profile_id": profile_id, "day_type": day_type.to_dict()}


@router.delete('/api/profiles/{profile_id}/day-types/{day_type_id}')
def remove_day_type(profile_id: str, day_type_id: str,
                    diet_repo: DietRepository = Depends(get_diet_repository),
                    shopping_repo: ShoppingRepository = Depends(get_shopping_repository)):
    plan = diet_repo.load_diet_plan(profile_id)
    if not plan.remove_day_type(day_type_id):
        raise HTTPException(status_code=404, detail="Day type not found")
    result = save_diet_plan_and_recompute(profile_id, plan, diet_repo, shopping_repo)
    return _plan_response(profile_id, plan, result)
