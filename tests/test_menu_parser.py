# tests/test_menu_parser.py
from __future__ import annotations

import json

from core.menu_parser import extract_json_object, parse_week_menu
from core.models.menu import WEEKDAYS

WEEK = {
    "monday": ["可乐鸡翅(主荤)(历史)", "青笋炒肉片(半荤)", "清炒油麦菜(素菜)", "拍黄瓜(凉菜)"],
    "tuesday": ["孜然羊排(主荤)", "宫保鸡丁(半荤)(历史)", "地三鲜(素菜)", "凉拌木耳(凉菜)"],
    "wednesday": ["红烧鲷鱼(主荤)", "鱼香肉丝(半荤)", "手撕包菜(素菜)", "夫妻肺片(凉菜)"],
    "thursday": ["黄焖鸡(主荤)", "青椒肉丝(半荤)", "蒜蓉西兰花(素菜)", "凉拌海带丝(凉菜)"],
    "friday": ["糖醋里脊(主荤)", "肉末茄子(半荤)", "番茄炒蛋(素菜)", "皮蛋豆腐(凉菜)"],
}


def _wrap(obj) -> str:
    return (
        "好的，以下是本周菜单：\n```json\n"
        + json.dumps(obj, ensure_ascii=False, indent=2)
        + "\n```\n希望对您有帮助！"
    )


# ── accepted ────────────────────────────────────────────────────────
def test_payload_inside_prose_is_extracted():
    menu = parse_week_menu(_wrap(WEEK))
    assert menu is not None
    assert menu.monday == WEEK["monday"]
    assert [d for d, _ in menu.days()] == list(WEEKDAYS)


def test_bare_payload():
    assert parse_week_menu(json.dumps(WEEK, ensure_ascii=False)) is not None


def test_empty_day_arrays_are_accepted():
    week = {day: [] for day in WEEKDAYS}
    menu = parse_week_menu(_wrap(week))
    assert menu is not None
    assert menu.friday == []


def test_extra_keys_are_ignored():
    menu = parse_week_menu(_wrap({**WEEK, "notes": "ok"}))
    assert menu is not None


def test_dict_input_passes_through():
    assert extract_json_object(WEEK) is WEEK


# ── rejected ────────────────────────────────────────────────────────
def test_missing_day_is_rejected():
    week = {k: v for k, v in WEEK.items() if k != "thursday"}
    assert parse_week_menu(_wrap(week)) is None


def test_string_day_value_is_rejected():
    week = {**WEEK, "tuesday": "宫保鸡丁(半荤)"}
    assert parse_week_menu(_wrap(week)) is None


def test_no_braces_is_rejected():
    assert parse_week_menu("抱歉，我无法生成菜单。") is None


def test_broken_json_is_rejected():
    assert parse_week_menu('{"monday": ["红烧肉(主荤)",}') is None


def test_top_level_array_is_rejected():
    assert parse_week_menu('[{"monday": []}]') is None


def test_empty_text_is_rejected():
    assert parse_week_menu("") is None
