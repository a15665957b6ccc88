"""Decision core for Peppa Scivolosa (Hearts) bots."""
