"""Kinship title vocabulary (Traditional Chinese terms of address)."""

SELF = "本人"
NO_RELATION = "無直接關係"
RELATIVE = "親戚"
DISTANT_RELATIVE = "遠親"

# Direct family
FATHER = "爸爸"
MOTHER = "媽媽"
SON = "兒子"
DAUGHTER = "女兒"
HUSBAND = "老公"
WIFE = "老婆"
SPOUSE = "配偶"

# Grandparents: paternal (祖) and maternal (外祖) lines
PATERNAL_GRANDFATHER = "爺爺"
PATERNAL_GRANDMOTHER = "奶奶"
MATERNAL_GRANDFATHER = "外公"
MATERNAL_GRANDMOTHER = "外婆"

GREAT_GRANDFATHER = "阿祖 (曾祖父)"
GREAT_GRANDMOTHER = "阿祖 (曾祖母)"
GREAT_GRANDFATHER_MATERNAL = "阿祖 (曾外祖父)"
GREAT_GRANDMOTHER_MATERNAL = "阿祖 (曾外祖母)"
PATRILINEAL_ANCESTOR = "太祖"

# Grandchildren: son's children and daughter's children (外)
GRANDSON = "孫子"
GRANDDAUGHTER = "孫女"
DAUGHTERS_SON = "外孫"
DAUGHTERS_DAUGHTER = "外孫女"
GREAT_GRANDSON = "曾孫"
GREAT_GRANDDAUGHTER = "曾孫女"

# Siblings
OLDER_BROTHER = "哥哥"
YOUNGER_BROTHER = "弟弟"
OLDER_SISTER = "姊姊"
YOUNGER_SISTER = "妹妹"

# Birth-order rank prefixes: eldest, second ... tenth, and youngest
RANK_PREFIXES = ("大", "二", "三", "四", "五", "六", "七", "八", "九", "十")
YOUNGEST_PREFIX = "小"
OLDER_BROTHER_SUFFIX = "哥"
YOUNGER_BROTHER_SUFFIX = "弟"
OLDER_SISTER_SUFFIX = "姊"
YOUNGER_SISTER_SUFFIX = "妹"

# Siblings' spouses
OLDER_BROTHERS_WIFE = "嫂嫂"
YOUNGER_BROTHERS_WIFE = "弟媳"
OLDER_SISTERS_HUSBAND = "姊夫"
YOUNGER_SISTERS_HUSBAND = "妹夫"

# Siblings' children
BROTHERS_SON = "姪子"
BROTHERS_DAUGHTER = "姪女"
SISTERS_SON = "外甥"
SISTERS_DAUGHTER = "外甥女"

# Parents' siblings
FATHERS_OLDER_BROTHER = "伯伯"
FATHERS_YOUNGER_BROTHER = "叔叔"
FATHERS_SISTER = "姑姑"
MOTHERS_BROTHER = "舅舅"
MOTHERS_SISTER = "阿姨"

# Parents' siblings' spouses
FATHERS_BROTHERS_WIFE = "嬸嬸/伯母"
FATHERS_SISTERS_HUSBAND = "姑丈"
MOTHERS_BROTHERS_WIFE = "舅媽"
MOTHERS_SISTERS_HUSBAND = "姨丈"

# Cousins: 堂 for the father's brothers' line, 表 for every other line
PATERNAL_LINE_PREFIX = "堂"
OTHER_LINE_PREFIX = "表"
OLDER_MALE_COUSIN = "哥"
YOUNGER_MALE_COUSIN = "弟"
OLDER_FEMALE_COUSIN = "姊"
YOUNGER_FEMALE_COUSIN = "妹"

# Cousins' spouses (prefixed with 堂/表)
OLDER_COUSINS_HUSBAND = "姊夫"
YOUNGER_COUSINS_HUSBAND = "妹夫"
OLDER_COUSINS_WIFE = "嫂"
YOUNGER_COUSINS_WIFE = "弟媳"

# Cousins' children (prefixed with 堂/表)
MALE_COUSINS_SON = "姪"
MALE_COUSINS_DAUGHTER = "姪女"
FEMALE_COUSINS_SON = "外甥"
FEMALE_COUSINS_DAUGHTER = "外甥女"

# In-laws through one's own spouse
HUSBANDS_FATHER = "公公"
HUSBANDS_MOTHER = "婆婆"
WIFES_FATHER = "岳父"
WIFES_MOTHER = "岳母"
SPOUSES_BROTHER = "{spouse}的兄弟"

# Children's spouses
SONS_WIFE = "媳婦"
DAUGHTERS_HUSBAND = "女婿"
