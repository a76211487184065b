"""Project-wide constants."""

MONTH_NAMES = {
    1: "January",
    2: "February",
    3: "March",
    4: "April",
    5: "May",
    6: "June",
    7: "July",
    8: "August",
    9: "September",
    10: "October",
    11: "November",
    12: "December",
}

VALID_MONTHS = range(1, 13)

LATITUDE_RANGE = (-90.0, 90.0)
LONGITUDE_RANGE = (-180.0, 180.0)

# Report markers
NO_OCCURRENCE = "no historical occurrence"
UNDEFINED = "undefined"
