"""
core/prompt.py
────────────────────────────────────────────────────────────────────────
Builds the instruction sent to the text generator.

The numeric targets (per-day hot/cold counts, main/half/vegetarian split,
weekly total, historical and original quotas) are written twice: once in
the narrative part and once in the checklist that closes the output
requirements.  The generator honours the checklist far more reliably when
the same numbers were already stated in prose, so keep both.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import chain
from typing import Sequence

from config import settings
from core.constraints import ConstraintFragments, map_constraints
from core.models.canteen import CanteenProfile, clean_dishes
from core.models.menu import GenerationParams
from core.quota import QuotaPlan

_LOG = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "你是一位在中国团餐行业工作多年的经验丰富的厨师长。"
    "请严格按照以下【开菜规则】和【约束条件】，为团餐食堂生成一周五天的午餐菜谱。"
)
OUTPUT_SECTION = "【输出要求】"
CHECKLIST_HEADER = "请确保："
HISTORICAL_SAMPLE_SLACK = settings.historical_sample_slack


@dataclass(frozen=True)
class ReferenceData:
    ingredients: str
    cooking_methods: str
    flavors: str


REFERENCE_DATA = ReferenceData(
    ingredients=(
        "常用高频原材料：鸡蛋、茄子、南瓜、娃娃菜、土豆、冬瓜、小白菜、油菜、苦瓜、丝瓜、"
        "鲈鱼、草鱼、龙利鱼、虾仁、鸡胸肉、三黄鸡、鸡腿肉、五花肉、猪里脊肉、牛里脊、老豆腐、香菇等"
    ),
    cooking_methods=(
        "主要烹饪方式：炒、熘、蒸、烧、烤、炖、煎、烹；辅助烹饪方式：炸、焗、煨、浇汁、烩、汆、灼、"
        "白灼、焖、淋、煲、卤、扒、熏、煮、煸、酿、爆、烹汁、汤、浸、拌、凉拌、溜"
    ),
    flavors=(
        "咸香、咸鲜、咸酸、蒜香、酸甜、香甜、葱香、咸辣、酸辣、辣、麻辣、甜辣、鲜辣、辣鲜、麻鲜、"
        "鲜香、醲香、香辣、孜然、复合、黑椒、酱香、酸香、甜、干香、咖喱、蜜汁、豉香、酒香、茄汁、奶香"
    ),
)


def sample_historical_dishes(
    pools: Sequence[Sequence[str]],
    historical_dishes: int,
    slack: int = HISTORICAL_SAMPLE_SLACK,
) -> list[str]:
    """Flatten the pools in order and keep the first `historical_dishes + slack`."""
    flat = clean_dishes(list(chain.from_iterable(pools)))
    return flat[: historical_dishes + slack]


def build_prompt(
    profile: CanteenProfile,
    params: GenerationParams,
    plan: QuotaPlan,
    fragments: ConstraintFragments,
    historical_dishes: Sequence[str],
    reference: ReferenceData = REFERENCE_DATA,
) -> str:
    hot, cold = profile.hot_dish_count, profile.cold_dish_count
    total = plan.total_dishes
    hist = plan.historical_dishes
    orig = plan.original_dishes
    sample_text = "、".join(historical_dishes)

    narrative = f"""{SYSTEM_PROMPT}

请为团餐食堂生成一周五天的午餐菜谱，每天包含{hot}个热菜和{cold}个凉菜（这个条件必须严格遵守），其中热菜里面包含{params.main_meat_count}个主荤菜、{params.half_meat_count}个半荤菜、{params.vegetarian_count}个素菜（这个也需要严格遵守）。

【重要】严格控制历史菜单占比：整个一周菜单（共{total}道菜）中，必须有且仅有{hist}道菜来源于【历史菜单】，其余{orig}道菜必须是全新的原创菜品，不能出现在【历史菜单】中。

【重要】历史菜品分散原则：为了保证一周菜单的新鲜感和均衡性，请将这些历史菜品均匀地分散在周一到周五的菜单中，每天都要有一些历史菜和一些原创菜的搭配，避免某一天全是历史菜或某一天全是原创菜。

【开菜规则】
1. 设备可实现性：{fragments.equipment}
2. 成本控制：一餐避免重复出现高成本食材/菜品，如水产品、牛羊肉
3. 菜品做工均衡：{fragments.work_ratio}
4. 食材多样性：一餐内，主要食材不得重复（例如：鸡翅、鸡腿、鸡胸、鸡爪是不同食材）
5. 原材料多样性：{fragments.ingredient}
6. 辣味菜数量要求：{fragments.spicy}
7. 刀工多样性：{fragments.staff}
8. 调味品多样性：{fragments.flavor}
9. 烹饪方式多样性：每周菜单必须出现炒、熘、蒸、烧、烤、炖、煎、烹8种烹饪方法中的至少六种
10. 口感多样性：一餐不要出现超过两个勾芡菜

【参考数据】
原材料：{reference.ingredients}
烹饪方式：{reference.cooking_methods}
风味：{reference.flavors}

【历史菜单】
{sample_text}

【菜品分类定义】
主荤菜：以肉类/海鲜为主要食材，体现'硬菜'感觉的菜品，即使有配菜也算主荤（如可乐鸡翅、孜然羊排、红烧鲷鱼、土豆炖牛肉等）
半荤菜：荤素搭配的菜品，荤菜和素菜比例相当（如青笋炒肉片、宫保鸡丁等）
素菜：纯素食或以蔬菜为主的菜品
凉菜：不区分荤素，一般以素食为主以控制成本

【分散策略建议】
建议每天安排大约{plan.suggested_daily_historical}道左右的历史菜（可以有1-2道的浮动），让历史经典菜品和创新菜品在每一天都有合理的搭配。"""

    output = f"""{OUTPUT_SECTION}
请严格按照JSON格式输出，包含周一到周五的菜单：
{{
  "monday": ["菜品A(主荤)", "菜品B(半荤)", "菜品C(素菜)", "菜品D(凉菜)"],
  "tuesday": ["..."],
  "wednesday": ["..."],
  "thursday": ["..."],
  "friday": ["..."]
}}

如果菜品来源于历史菜单，请额外标注(历史)，如：可乐鸡翅(主荤)(历史)

{CHECKLIST_HEADER}
- 每天菜品数量严格等于{plan.dishes_per_day}道
- 每天热菜数量严格等于{hot}道，凉菜数量严格等于{cold}道
- 每天热菜中主荤{params.main_meat_count}道、半荤{params.half_meat_count}道、素菜{params.vegetarian_count}道
- 整周菜品总数严格等于{total}道
- 【最重要】整周标注(历史)的菜品总数必须严格等于{hist}道，不能多也不能少
- 原创菜品（不标注历史的）总数必须严格等于{orig}道
- 菜品分类标注准确，每天都要有历史菜和原创菜的合理搭配"""

    _LOG.debug(
        "prompt built: total=%d historical=%d original=%d sample=%d",
        total, hist, orig, len(historical_dishes),
    )
    return f"{narrative}\n\n{output}"


def compose_instruction(
    profile: CanteenProfile,
    params: GenerationParams,
    slack: int = HISTORICAL_SAMPLE_SLACK,
) -> tuple[str, QuotaPlan]:
    """Quota → constraint fragments → historical sample → instruction text."""
    plan = QuotaPlan.build(
        profile.hot_dish_count, profile.cold_dish_count, params.historical_ratio
    )
    fragments = map_constraints(params)
    sample = sample_historical_dishes(
        profile.historical_menus, plan.historical_dishes, slack
    )
    return build_prompt(profile, params, plan, fragments, sample), plan
