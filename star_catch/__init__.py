"""
Star Catch Package
==================

This package contains the round simulation, configuration, observation
export and evaluation harness for the Star Catch arcade game:

- Star spawning and falling
- Basket movement and catch detection
- Difficulty ramp over elapsed round time
- Round lifecycle (idle, running, ended)

All tunable parameters are in game_config.yaml.
"""
