"""Wedding Songs planner app (TUI).

Interactive Textual TUI where a couple browses the song catalog, picks one
song per ceremony moment, previews audio and lyrics, and downloads, shares
or sends the selection to the choir.
"""
