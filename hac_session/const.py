"""Constants for the HAC session client."""

# Configuration
CONF_HOST = "host"
CONF_USERNAME = "username"
CONF_PASSWORD = "password"
CONF_HAC_NAME = "hac_name"
CONF_TIMEOUT = "timeout"
CONF_USE_ANIMATION = "use_animation"
CONF_USER_AGENT = "user_agent"
CONF_FALLBACK_PERIOD = "fallback_period"
CONF_POSTBACK_FIELDS = "postback_fields"

# Defaults
DEFAULT_TIMEOUT = 60
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_9_4) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/36.0.1985.125 Safari/537.36"
)
DEFAULT_FALLBACK_PERIOD = "1-2025"
DEFAULT_CREDIT_HOURS = 0.5
DEFAULT_COURSE_WEIGHT = 1.0

# Endpoints
LOGIN_PATH = "/HomeAccess/Account/LogOn"
REGISTRATION_PATH = "/HomeAccess/Content/Student/Registration.aspx"
ASSIGNMENTS_PATH = "/HomeAccess/Content/Student/Assignments.aspx"

# Login form
FIELD_TOKEN = "__RequestVerificationToken"
FIELD_DATABASE = "Database"
FIELD_USERNAME = "LogOnDetails.UserName"
FIELD_PASSWORD = "LogOnDetails.Password"

# Assignments page
PERIOD_SELECT_ID = "plnMain_ddlReportCardRuns"
PERIOD_FIELD = "ctl00$plnMain$ddlReportCardRuns"
VIEWSTATE_FIELD = "__VIEWSTATE"
EVENTVALIDATION_FIELD = "__EVENTVALIDATION"
COURSE_CONTAINER_CLASS = "AssignmentClass"
DATA_ROW_CLASS = "sg-asp-table-data-row"
COURSE_AVERAGE_ID = "plnMain_rptAssigmnetsByCourse_lblHdrAverage_{index}"
COURSE_ASSIGNMENTS_ID = "plnMain_rptAssigmnetsByCourse_dgCourseAssignments_{index}"
COURSE_CATEGORIES_ID = "plnMain_rptAssigmnetsByCourse_dgCourseCategories_{index}"
COURSE_NAME_PREFIX_TOKENS = 3

# Registration page
PROFILE_FIELD_IDS = {
    "student_id": "plnMain_lblRegStudentID",
    "name": "plnMain_lblRegStudentName",
    "birthdate": "plnMain_lblBirthDate",
    "counselor": "plnMain_lblCounselor",
    "building": "plnMain_lblBuildingName",
    "grade": "plnMain_lblGrade",
    "language": "plnMain_lblLanguage",
}

NOT_AVAILABLE = "N/A"
NBSP_PLACEHOLDERS = ("\xa0", "&nbsp", "&nbsp;")

# Placeholder for a category the portal listed no weight for
PLACEHOLDER_POINTS_EARNED = "100"
PLACEHOLDER_POINTS_POSSIBLE = "100"
PLACEHOLDER_WEIGHT = "0"

# Hidden fields the Assignments page posts back on "Refresh View".
# They are static for a given portal release; __VIEWSTATE, __EVENTVALIDATION
# and the report card run are filled in per response.
DEFAULT_POSTBACK_FIELDS = {
    "__EVENTTARGET": "ctl00$plnMain$btnRefreshView",
    "__EVENTARGUMENT": "",
    "__VIEWSTATEGENERATOR": "B0093F3C",
    "ctl00$plnMain$hdnValidMHACLicense": "Y",
    "ctl00$plnMain$hdnIsVisibleClsWrk": "N",
    "ctl00$plnMain$hdnIsVisibleCrsAvg": "N",
    "ctl00$plnMain$hdnJsAlert": "Averages cannot be displayed when Report Card Run is set to (All Runs).",
    "ctl00$plnMain$hdnTitle": "Classwork",
    "ctl00$plnMain$hdnLastUpdated": "Last Updated",
    "ctl00$plnMain$hdnDroppedCourse": " This course was dropped as of ",
    "ctl00$plnMain$hdnddlClasses": "(All Classes)",
    "ctl00$plnMain$hdnddlCompetencies": "(All Classes)",
    "ctl00$plnMain$hdnCompDateDue": "Date Due",
    "ctl00$plnMain$hdnCompDateAssigned": "Date Assigned",
    "ctl00$plnMain$hdnCompCourse": "Course",
    "ctl00$plnMain$hdnCompAssignment": "Assignment",
    "ctl00$plnMain$hdnCompAssignmentLabel": "Assignments Not Related to Any Competency",
    "ctl00$plnMain$hdnCompNoAssignments": "No assignments found",
    "ctl00$plnMain$hdnCompNoClasswork": "Classwork could not be found for this competency for the selected report card run.",
    "ctl00$plnMain$hdnCompScore": "Score",
    "ctl00$plnMain$hdnCompPoints": "Points",
    "ctl00$plnMain$hdnddlReportCardRuns1": "(All Runs)",
    "ctl00$plnMain$hdnddlReportCardRuns2": "(All Terms)",
    "ctl00$plnMain$hdnbtnShowAverage": "Show All Averages",
    "ctl00$plnMain$hdnShowAveragesToolTip": "Show all student's averages",
    "ctl00$plnMain$hdnPrintClassworkToolTip": "Print all classwork",
    "ctl00$plnMain$hdnPrintClasswork": "Print Classwork",
    "ctl00$plnMain$hdnCollapseToolTip": "Collapse all courses",
    "ctl00$plnMain$hdnCollapse": "Collapse All",
    "ctl00$plnMain$hdnFullToolTip": "Switch courses to Full View",
    "ctl00$plnMain$hdnViewFull": "Full View",
    "ctl00$plnMain$hdnQuickToolTip": "Switch courses to Quick View",
    "ctl00$plnMain$hdnViewQuick": "Quick View",
    "ctl00$plnMain$hdnExpand": "Expand All",
    "ctl00$plnMain$hdnExpandToolTip": "Expand all courses",
    "ctl00$plnMain$hdnChildCompetencyMessage": "This competency is calculated as an average of the following competencies",
    "ctl00$plnMain$hdnCompetencyScoreLabel": "Grade",
    "ctl00$plnMain$hdnAverageDetailsDialogTitle": "Average Details",
    "ctl00$plnMain$hdnAssignmentCompetency": "Assignment Competency",
    "ctl00$plnMain$hdnAssignmentCourse": "Assignment Course",
    "ctl00$plnMain$hdnTooltipTitle": "Title",
    "ctl00$plnMain$hdnCategory": "Category",
    "ctl00$plnMain$hdnDueDate": "Due Date",
    "ctl00$plnMain$hdnMaxPoints": "Max Points",
    "ctl00$plnMain$hdnCanBeDropped": "Can Be Dropped",
    "ctl00$plnMain$hdnHasAttachments": "Has Attachments",
    "ctl00$plnMain$hdnExtraCredit": "Extra Credit",
    "ctl00$plnMain$hdnType": "Type",
    "ctl00$plnMain$hdnAssignmentDataInfo": "Information could not be found for the assignment",
    "ctl00$plnMain$rdoViewFor": "rdoViewForCourse",
    "ctl00$plnMain$ddlClasses": "ALL",
    "ctl00$plnMain$ddlCompetencies": "ALL",
    "ctl00$plnMain$ddlOrderBy": "Class",
}
