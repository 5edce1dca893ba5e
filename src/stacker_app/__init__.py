"""Tkinter front end for the curved panel stacker."""
