# pricing/schedule.py - agreed business markup schedule

# Suggested wholesale price:
#   (labor + materials) * NON_METAL_MULTIPLIER
#   + silver
#   + total weight * WEIGHT_SURCHARGE_PER_GRAM
NON_METAL_MULTIPLIER = 2.0
WEIGHT_SURCHARGE_PER_GRAM = 2.0

# Prices are rounded to the nearest 10 cents
PRICE_STEP = "0.1"

CURRENCY_SYMBOL = "€"
DECIMAL_SEPARATOR = ","

# Retail label price code: LABEL_CODE_HEAD + cents + LABEL_CODE_TAIL
LABEL_CODE_HEAD = "1"
LABEL_CODE_TAIL = "9"

# ---------------------- SUPPLIER ANALYSIS ----------------------------
# Plating rate assumed when estimating what in-house plating would cost
EST_PLATING_RATE_PER_GRAM = 0.60

# Supplier cost / theoretical make cost, checked in order
VERDICT_BANDS = [
    (0.95, "Excellent"),
    (1.30, "Fair"),
    (1.80, "Expensive"),
]
VERDICT_OVER = "Overpriced"

# Effective metal price above spot x this factor means hidden markup
HIDDEN_MARKUP_FACTOR = 1.15

# Reported minus estimated labor (EUR): below CHEAPER is cheaper, above DEARER dearer
LABOR_CHEAPER_DIFF = -0.5
LABOR_DEARER_DIFF = 1.0
PLATING_CHEAPER_DIFF = -0.2
PLATING_DEARER_DIFF = 0.5
