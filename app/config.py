# all the settings live here so we dont scatter magic numbers everywhere

CAMERA_WIDTH = 640
CAMERA_HEIGHT = 480
CAMERA_INDEX = 0
MAX_FRAME_DROPS = 30  # stop the session after this many bad reads in a row

# mediapipe
MAX_HANDS = 1
DETECTION_CONFIDENCE = 0.55
TRACKING_CONFIDENCE = 0.5
DETECTION_WIDTH = 480     # process at lower res for speed
MODEL_FILE = "hand_landmarker.task"

# canvas - the camera preview gets scaled up to this size
CANVAS_WIDTH = 960
CANVAS_HEIGHT = 720

# landmarks come from the raw (unmirrored) frame. flip x once when
# they enter canvas space so drawing follows the mirrored preview
MIRROR_INPUT = True

# pinch toggle
PINCH_THRESHOLD = 0.03    # normalized thumb-index distance
PEN_COOLDOWN_MS = 500     # min time between two toggles in draw mode
DRAG_COOLDOWN_MS = 600    # drag mode is a bit slower, grabbing is fiddly

# point smoothing
SMOOTHING_FACTOR = 0.4    # how much of the weighted trend goes into the output
POINT_MEMORY = 2          # raw points kept for the weighted average

# stroke
STROKE_COLOR = (0, 0, 255)  # red (BGR)
STROKE_THICKNESS = 4
CURVE_STEPS = 8           # samples per quadratic segment
MAX_SEGMENT_JUMP = 150    # px, bigger jumps start a new stroke (hand re-entry)

# drag mode
DRAG_IMAGE_PATH = None    # None = generated placeholder picture
DRAG_IMAGE_SIZE = (250, 150)
DRAG_IMAGE_START = (300, 300)

# ui
WINDOW_NAME = "Air Canvas"
SHOW_LANDMARKS = True
UI_FONT_SCALE = 0.55
UI_THICKNESS = 1

# logging
LOG_FILE = "air_canvas.log"
LOG_LEVEL = "INFO"
