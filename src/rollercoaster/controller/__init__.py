"""
The CONTROLLER layer drives the model: it samples the track into geometry and
advances the animation state. It never imports Qt or PyVista.
"""
