"""Solutions for puzzle days 15 to 18."""