"""Constants shared by test modules (CC numbers from the shipped config.yaml)"""

HUE_KNOB = 79
ANIMATION_KNOB = 14
DURATION_KNOB = 78
THICKNESS_KNOB = 71
RATE_KNOB = 72
DISTANCE_KNOB = 73
ASSIGN_BUTTON = 86
