"""Short link service: slug allocation and redirect resolution."""
