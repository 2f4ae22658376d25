"""
Alley Cats Race Game Engine
Core rules engine without web framework, rendering, or input handling.
"""

# Reserved location names. Team ids and square ids may not use them.
START = "start"
END = "end"
RESERVED_LOCATIONS = (START, END)
