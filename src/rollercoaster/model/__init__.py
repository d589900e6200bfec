"""
The MODEL layer contains pure data structures and the curve mathematics.
It has NO knowledge of the GUI (Qt) or the Visualization (PyVista).
It deals with the track, the spline, the moving frame and the banking.
"""
