"""
Canned patient message templates.

Bodies carry `{token}` placeholders that are filled from a patient's clinical
snapshot by `app.features.messages.template_engine`.
"""

from dataclasses import dataclass, field
from typing import List, Literal, Optional, Tuple


MessageCategory = Literal["general", "appointment", "lab_result", "treatment_plan"]
MessagePriority = Literal["low", "normal", "high"]


@dataclass(frozen=True)
class MessageTemplate:
    id: str
    name: str
    category: MessageCategory
    icon: str
    priority: MessagePriority
    content: str
    # Clinical conditions under which the template is relevant
    suggest_when: Tuple[str, ...] = field(default_factory=tuple)


MESSAGE_TEMPLATES: List[MessageTemplate] = [
    MessageTemplate(
        id="appointment-reminder",
        name="Appointment Reminder",
        category="appointment",
        icon="calendar",
        priority="normal",
        suggest_when=("hasUpcomingAppointment",),
        content="""Dear {patientName},

This is a friendly reminder about your upcoming appointment scheduled for {appointmentDate} at {appointmentTime} with {doctorName}.

Please arrive 15 minutes early to complete any necessary paperwork. If you need to reschedule, please contact us at least 24 hours in advance.

We look forward to seeing you!

Best regards,
{clinicName}""",
    ),
    MessageTemplate(
        id="lab-results",
        name="Lab Results Ready",
        category="lab_result",
        icon="file-text",
        priority="high",
        suggest_when=("hasRecentLabResults",),
        content="""Dear {patientName},

Your recent lab results from {labTestDate} are now available.

Test(s) completed: {labTestNames}

Please log into your patient portal to view them, or contact our office to schedule a follow-up appointment with your healthcare provider.

If you have any questions about your results, please don't hesitate to reach out.

Best regards,
{clinicName}""",
    ),
    MessageTemplate(
        id="prescription-refill",
        name="Prescription Refill Reminder",
        category="treatment_plan",
        icon="pill",
        priority="normal",
        suggest_when=("hasActivePrescriptions",),
        content="""Dear {patientName},

This is a reminder that your prescription for {medicationName} ({medicationDosage}) is due for a refill.

Current medication details:
- Medication: {medicationName}
- Dosage: {medicationDosage}
- Instructions: {medicationInstructions}

Please contact our office or visit your pharmacy to ensure you don't run out of your medication.

If you have any questions or need to discuss your treatment plan, please schedule an appointment with your healthcare provider.

Best regards,
{clinicName}""",
    ),
    MessageTemplate(
        id="follow-up",
        name="Follow-up Visit Request",
        category="appointment",
        icon="stethoscope",
        priority="normal",
        suggest_when=("hasRecentVisit", "hasFollowUpDue"),
        content="""Dear {patientName},

We hope you're recovering well since your last visit on {lastVisitDate}.

It's time for your follow-up visit to review your progress and discuss your ongoing care regarding: {lastVisitReason}

Please contact our office to schedule your next appointment at your earliest convenience.

We look forward to seeing you soon!

Best regards,
{clinicName}""",
    ),
    MessageTemplate(
        id="health-tips",
        name="General Health Tips",
        category="general",
        icon="heart",
        priority="low",
        content="""Dear {patientName},

Here are some helpful health tips for this season:

• Stay hydrated by drinking plenty of water
• Maintain a balanced diet rich in fruits and vegetables
• Get regular exercise - aim for at least 30 minutes daily
• Ensure adequate sleep (7-9 hours for adults)
• Schedule your annual check-up

If you have any health concerns, please don't hesitate to contact us.

Best regards,
{clinicName}""",
    ),
    MessageTemplate(
        id="payment-reminder",
        name="Payment Reminder",
        category="general",
        icon="credit-card",
        priority="normal",
        suggest_when=("hasOutstandingBalance",),
        content="""Dear {patientName},

This is a friendly reminder regarding your outstanding balance of {amountDue}.

Please log into your patient portal to make a payment, or contact our billing department if you have any questions or would like to discuss payment options.

Thank you for your prompt attention to this matter.

Best regards,
{clinicName}""",
    ),
    MessageTemplate(
        id="abnormal-results",
        name="Abnormal Lab Results - Urgent",
        category="lab_result",
        icon="alert-circle",
        priority="high",
        suggest_when=("hasAbnormalLabResults",),
        content="""Dear {patientName},

Your recent lab results require attention. We would like to discuss them with you at your earliest convenience.

Test: {labTestNames}
Date: {labTestDate}

Please contact our office as soon as possible to schedule a follow-up appointment with your healthcare provider.

If you experience any concerning symptoms, please seek immediate medical attention.

Best regards,
{clinicName}""",
    ),
    MessageTemplate(
        id="medication-change",
        name="Medication Change Notice",
        category="treatment_plan",
        icon="pill",
        priority="high",
        suggest_when=("hasMedicationChange",),
        content="""Dear {patientName},

Your healthcare provider has made changes to your medication plan. Please review the following updates:

Previous: {previousMedication}
New: {newMedication}

Important instructions: {medicationInstructions}

Please ensure you understand these changes before starting your new medication. If you have any questions or concerns, contact our office immediately.

Best regards,
{clinicName}""",
    ),
]

_TEMPLATES_BY_ID = {template.id: template for template in MESSAGE_TEMPLATES}


def get_template(template_id: str) -> Optional[MessageTemplate]:
    return _TEMPLATES_BY_ID.get(template_id)


def list_templates(category: Optional[str] = None) -> List[MessageTemplate]:
    if category is None:
        return list(MESSAGE_TEMPLATES)
    return [t for t in MESSAGE_TEMPLATES if t.category == category]
