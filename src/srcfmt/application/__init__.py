"""Application services shared by the user interfaces."""
