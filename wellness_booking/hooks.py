app_name = "wellness_booking"
app_title = "Wellness Booking"
app_publisher = "ITT Heal"
app_description = "Agenda del practitioner: horarios, feriados, conflictos y add-ons"
app_email = "dev@ittheal.com"
app_license = "mit"

# Apps
# ------------------

# required_apps = []

# Includes in <head>
# ------------------

# include js, css files in header of desk.html
# app_include_css = "/assets/wellness_booking/css/wellness_booking.css"
# app_include_js = "/assets/wellness_booking/js/wellness_booking.js"

# include js in doctype views
# doctype_js = {"doctype" : "public/js/doctype.js"}
# doctype_calendar_js = {"doctype" : "public/js/doctype_calendar.js"}

# Installation
# ------------

# before_install = "wellness_booking.install.before_install"
after_install = "wellness_booking.install.after_install"

# Uninstallation
# ------------

# before_uninstall = "wellness_booking.uninstall.before_uninstall"
# after_uninstall = "wellness_booking.uninstall.after_uninstall"

# Permissions
# -----------
# Permissions evaluated in scripted ways

# permission_query_conditions = {
# 	"Event": "frappe.desk.doctype.event.event.get_permission_query_conditions",
# }
#
# has_permission = {
# 	"Event": "frappe.desk.doctype.event.event.has_permission",
# }

# Document Events
# ---------------
# Hook on document methods and events

# doc_events = {
# 	"*": {
# 		"on_update": "method",
# 		"on_cancel": "method",
# 		"on_trash": "method"
# 	}
# }

# Scheduled Tasks
# ---------------

# scheduler_events = {
# 	"daily": [
# 		"wellness_booking.tasks.daily"
# 	],
# }

# Testing
# -------

# before_tests = "wellness_booking.install.before_tests"

# Overriding Methods
# ------------------------------
#
# override_whitelisted_methods = {
# 	"frappe.desk.doctype.event.event.get_events": "wellness_booking.event.get_events"
# }

# Request Events
# ----------------
# before_request = ["wellness_booking.utils.before_request"]
# after_request = ["wellness_booking.utils.after_request"]

# User Data Protection
# --------------------

# user_data_fields = [
# 	{
# 		"doctype": "Session Booking",
# 		"filter_by": "owner",
# 		"redact_fields": ["client_name", "notes"],
# 		"partial": 1,
# 	},
# ]

# default_log_clearing_doctypes = {
# 	"Logging DocType Name": 30  # days to retain logs
# }
