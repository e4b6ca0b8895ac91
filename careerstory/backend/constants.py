MAX_ERROR_CHARS = 1200
EMPTY_PROJECTS_MESSAGE = "Please add at least one project before generating a pitch."
GENERATION_FAILED_MESSAGE = "Failed to generate the script. Please try again."
