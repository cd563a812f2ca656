from typing import Dict, Tuple

from .models import ComputedRule, Festival, FixedRule, LunarRule, NthWeekdayRule

# ------------------ 中国节日 ------------------
CN_FESTIVALS: Tuple[Festival, ...] = (
    # 农历
    Festival(name="Spring Festival", name_zh="春节", region="CN", rule=LunarRule(lunar_month=1, lunar_day=1)),
    Festival(name="Lantern Festival", name_zh="元宵节", region="CN", rule=LunarRule(lunar_month=1, lunar_day=15)),
    Festival(name="Dragon Head Raising", name_zh="龙抬头", region="CN", rule=LunarRule(lunar_month=2, lunar_day=2)),
    Festival(name="Shangsi Festival", name_zh="上巳节", region="CN", rule=LunarRule(lunar_month=3, lunar_day=3)),
    Festival(name="Dragon Boat Festival", name_zh="端午节", region="CN", rule=LunarRule(lunar_month=5, lunar_day=5)),
    Festival(name="Qixi Festival", name_zh="七夕节", region="CN", rule=LunarRule(lunar_month=7, lunar_day=7)),
    Festival(name="Ghost Festival", name_zh="中元节", region="CN", rule=LunarRule(lunar_month=7, lunar_day=15)),
    Festival(name="Mid-Autumn Festival", name_zh="中秋节", region="CN", rule=LunarRule(lunar_month=8, lunar_day=15)),
    Festival(name="Double Ninth Festival", name_zh="重阳节", region="CN", rule=LunarRule(lunar_month=9, lunar_day=9)),
    Festival(name="Hanyi Festival", name_zh="寒衣节", region="CN", rule=LunarRule(lunar_month=10, lunar_day=1)),
    Festival(name="Xiayuan Festival", name_zh="下元节", region="CN", rule=LunarRule(lunar_month=10, lunar_day=15)),
    Festival(name="Laba Festival", name_zh="腊八节", region="CN", rule=LunarRule(lunar_month=12, lunar_day=8)),
    Festival(name="Little New Year", name_zh="小年", region="CN", rule=LunarRule(lunar_month=12, lunar_day=23)),
    Festival(name="New Year's Eve", name_zh="除夕", region="CN",
             rule=LunarRule(lunar_month=12, lunar_day=30, year_end=True)),
    # 节气
    Festival(name="Qingming Festival", name_zh="清明节", region="CN", rule=ComputedRule(algorithm="qingming")),
    Festival(name="Winter Solstice", name_zh="冬至", region="CN", rule=FixedRule(month=12, day=22)),
    # 公历
    Festival(name="New Year's Day", name_zh="元旦", region="CN", rule=FixedRule(month=1, day=1)),
    Festival(name="Valentine's Day", name_zh="情人节", region="CN", rule=FixedRule(month=2, day=14)),
    Festival(name="Women's Day", name_zh="妇女节", region="CN", rule=FixedRule(month=3, day=8)),
    Festival(name="Arbor Day", name_zh="植树节", region="CN", rule=FixedRule(month=3, day=12)),
    Festival(name="Labour Day", name_zh="劳动节", region="CN", rule=FixedRule(month=5, day=1)),
    Festival(name="Youth Day", name_zh="青年节", region="CN", rule=FixedRule(month=5, day=4)),
    Festival(name="Children's Day", name_zh="儿童节", region="CN", rule=FixedRule(month=6, day=1)),
    Festival(name="CPC Founding Day", name_zh="建党节", region="CN", rule=FixedRule(month=7, day=1)),
    Festival(name="Army Day", name_zh="建军节", region="CN", rule=FixedRule(month=8, day=1)),
    Festival(name="Teachers' Day", name_zh="教师节", region="CN", rule=FixedRule(month=9, day=10)),
    Festival(name="National Day", name_zh="国庆节", region="CN", rule=FixedRule(month=10, day=1)),
)

# ------------------ 香港公众假期 ------------------
HK_FESTIVALS: Tuple[Festival, ...] = (
    Festival(name="New Year's Day", name_zh="元旦", region="HK", rule=FixedRule(month=1, day=1)),
    Festival(name="Labour Day", name_zh="劳动节", region="HK", rule=FixedRule(month=5, day=1)),
    Festival(name="HKSAR Establishment Day", name_zh="香港特别行政区成立纪念日", region="HK",
             rule=FixedRule(month=7, day=1)),
    Festival(name="National Day", name_zh="国庆日", region="HK", rule=FixedRule(month=10, day=1)),
    Festival(name="Christmas Day", name_zh="圣诞节", region="HK", rule=FixedRule(month=12, day=25)),
    Festival(name="Boxing Day", name_zh="圣诞节翌日", region="HK", rule=FixedRule(month=12, day=26)),
    Festival(name="Lunar New Year's Day", name_zh="农历年初一", region="HK", rule=LunarRule(lunar_month=1, lunar_day=1)),
    Festival(name="Lunar New Year's Day 2", name_zh="农历年初二", region="HK",
             rule=LunarRule(lunar_month=1, lunar_day=2)),
    Festival(name="Lunar New Year's Day 3", name_zh="农历年初三", region="HK",
             rule=LunarRule(lunar_month=1, lunar_day=3)),
    Festival(name="Buddha's Birthday", name_zh="佛诞", region="HK", rule=LunarRule(lunar_month=4, lunar_day=8)),
    Festival(name="Tuen Ng Festival", name_zh="端午节", region="HK", rule=LunarRule(lunar_month=5, lunar_day=5)),
    Festival(name="Day after Mid-Autumn Festival", name_zh="中秋节翌日", region="HK",
             rule=LunarRule(lunar_month=8, lunar_day=16)),
    Festival(name="Chung Yeung Festival", name_zh="重阳节", region="HK", rule=LunarRule(lunar_month=9, lunar_day=9)),
    Festival(name="Ching Ming Festival", name_zh="清明节", region="HK", rule=ComputedRule(algorithm="qingming")),
    Festival(name="Good Friday", name_zh="耶稣受难节", region="HK", rule=ComputedRule(algorithm="easter", offset=-2)),
    Festival(name="Day after Good Friday", name_zh="耶稣受难节翌日", region="HK",
             rule=ComputedRule(algorithm="easter", offset=-1)),
    Festival(name="Easter Monday", name_zh="复活节星期一", region="HK",
             rule=ComputedRule(algorithm="easter", offset=1)),
)

# ------------------ 美国节日 ------------------
# weekday: 0 = 周日, 1 = 周一, ..., 4 = 周四
US_FESTIVALS: Tuple[Festival, ...] = (
    Festival(name="New Year's Day", region="US", rule=FixedRule(month=1, day=1)),
    Festival(name="Martin Luther King Jr. Day", region="US", rule=NthWeekdayRule(month=1, weekday=1, n=3)),
    Festival(name="Presidents' Day", region="US", rule=NthWeekdayRule(month=2, weekday=1, n=3)),
    Festival(name="Easter Sunday", name_zh="复活节", region="US", rule=ComputedRule(algorithm="easter")),
    Festival(name="Mother's Day", name_zh="母亲节", region="US", rule=NthWeekdayRule(month=5, weekday=0, n=2)),
    Festival(name="Memorial Day", region="US", rule=NthWeekdayRule(month=5, weekday=1, n=-1)),
    Festival(name="Father's Day", name_zh="父亲节", region="US", rule=NthWeekdayRule(month=6, weekday=0, n=3)),
    Festival(name="Independence Day", region="US", rule=FixedRule(month=7, day=4)),
    Festival(name="Labor Day", region="US", rule=NthWeekdayRule(month=9, weekday=1, n=1)),
    Festival(name="Columbus Day", region="US", rule=NthWeekdayRule(month=10, weekday=1, n=2)),
    Festival(name="Halloween", name_zh="万圣节", region="US", rule=FixedRule(month=10, day=31)),
    Festival(name="Veterans Day", region="US", rule=FixedRule(month=11, day=11)),
    Festival(name="Thanksgiving", name_zh="感恩节", region="US", rule=NthWeekdayRule(month=11, weekday=4, n=4)),
    Festival(name="Christmas", name_zh="圣诞节", region="US", rule=FixedRule(month=12, day=25)),
)

FESTIVALS_BY_REGION: Dict[str, Tuple[Festival, ...]] = {
    "CN": CN_FESTIVALS,
    "HK": HK_FESTIVALS,
    "US": US_FESTIVALS,
}
