"""Label tables for the calculator display, one per supported language."""

from __future__ import annotations

from typing import Literal, Optional

Language = Literal["en", "th"]

DEFAULT_LANGUAGE: Language = "en"

TRANSLATIONS: dict[str, dict[str, str]] = {
    "en": {
        "title": "Insulin Dose Calculator",
        "bg_label": "Blood glucose before meal",
        "bg_unit": "mg/dL",
        "carb_label": "Total carbohydrate count",
        "carb_count": "Carb count",
        "carb_unit": "carb",
        "carb_gram": "Grams (g)",
        "gram_unit": "g",
        "carb_helper": "1 carb = 15 grams",
        "tdd": "Total Daily Dose (TDD) of insulin",
        "units": "units",
        "basal": "Selected Basal insulin dose",
        "target_bg": "Target blood glucose",
        "dose_rec": "Dose Recommendations",
        "bolus": "Bolus dose (for carbs)",
        "correction": "Corrected BGL dose",
        "total_dose": "Total mealtime dose:",
        "refresh": "Refresh",
        "table_title": "Recommended bolus dose",
        "carb_units": "Carb units",
        "dose_units": "Dose (units)",
        "footer": "Before using this app, please consult your healthcare provider.",
        "show_ratios": "Show ICR & ISF",
        "hide_ratios": "Hide ICR & ISF",
        "icr": "Insulin-to-Carb Ratio (ICR)",
        "isf": "Insulin Sensitivity Factor (ISF)",
        "basal_rec": "Basal insulin dose recommended:",
        "units_range": "units",
    },
    "th": {
        "title": "คำนวณปริมาณอินซูลิน",
        "bg_label": "น้ำตาลในเลือดก่อนมื้ออาหาร",
        "bg_unit": "มก./ดล.",
        "carb_label": "ปริมาณคาร์โบไฮเดรตรวม",
        "carb_count": "จำนวนคาร์บ",
        "carb_unit": "คาร์บ",
        "carb_gram": "กรัม (g)",
        "gram_unit": "กรัม",
        "carb_helper": "1 คาร์บ = 15 กรัม",
        "tdd": "ปริมาณอินซูลินต่อวัน (TDD)",
        "units": "ยูนิต",
        "basal": "ปริมาณเบซัลอินซูลินที่เลือก",
        "target_bg": "เป้าหมายน้ำตาลในเลือด",
        "dose_rec": "คำแนะนำปริมาณอินซูลิน",
        "bolus": "ขนาดอินซูลินสำหรับคาร์บ",
        "correction": "ขนาดอินซูลินสำหรับแก้ไขน้ำตาล",
        "total_dose": "ปริมาณอินซูลินที่ต้องฉีดมื้อนี้:",
        "refresh": "รีเซ็ต",
        "table_title": "ขนาดอินซูลินที่แนะนำ",
        "carb_units": "จำนวนคาร์บ",
        "dose_units": "ยูนิต",
        "footer": "ก่อนใช้แอพนี้โปรดปรึกษาแพทย์",
        "show_ratios": "แสดง ICR และ ISF",
        "hide_ratios": "ซ่อน ICR และ ISF",
        "icr": "อัตราส่วนอินซูลินต่อคาร์บ (ICR)",
        "isf": "ปัจจัยความไวต่ออินซูลิน (ISF)",
        "basal_rec": "แนะนำเบซัลอินซูลิน:",
        "units_range": "ยูนิต",
    },
}


def normalize_language(value: Optional[str]) -> Language:
    if value == "th":
        return "th"
    return DEFAULT_LANGUAGE


def other_language(lang: Language) -> Language:
    return "th" if lang == "en" else "en"


def labels_for(lang: Optional[str]) -> dict[str, str]:
    return TRANSLATIONS[normalize_language(lang)]
