"""Client for the DigitalOcean v2 API: droplets, droplet and image actions, firewalls and floating IPs."""

__version__ = "0.1.0"