"""
Document Templates - Fixed Section Skeletons per Service

Each template is a str.format skeleton with these fields:
    {timestamp} → ISO-8601 UTC generation timestamp
    {bullets}   → Clinician notes, one "• note" line each, input order
    {date}      → Terminal date line value (M/D/YYYY)
    {title}     → Generic template only: upper-cased service display name

Square-bracket placeholders such as [Doctor Name] are literal text left for
manual completion downstream.

Author: Emergency-Mind Team
Date: October 2026
"""

from emergency_mind.core.enums import ServiceCode


# =============================================================================
# STAGE 1: SERVICE TEMPLATES
# =============================================================================

FINAL_REPORT_TEMPLATE = """FINAL MEDICAL REPORT
Generated: {timestamp}

PATIENT PRESENTATION:
{bullets}

CLINICAL ASSESSMENT:
Based on the presenting symptoms and clinical findings, the patient demonstrates signs consistent with the reported condition. A thorough examination was conducted following standard medical protocols.

DIAGNOSTIC WORKUP:
- Vital signs were assessed and documented
- Appropriate diagnostic tests were ordered based on clinical presentation
- Differential diagnosis was considered

TREATMENT PLAN:
- Immediate interventions were implemented as clinically indicated
- Patient was monitored for response to treatment
- Follow-up care was arranged as appropriate

PROGNOSIS:
The patient's condition is being managed according to established medical guidelines. Continued monitoring and follow-up are recommended.

ATTENDING PHYSICIAN: [Doctor Name]
SIGNATURE: ________________
DATE: {date}"""


INSURANCE_APPROVAL_TEMPLATE = """INSURANCE APPROVAL REQUEST
Generated: {timestamp}

PATIENT INFORMATION:
{bullets}

MEDICAL JUSTIFICATION:
The requested treatment/procedure is medically necessary based on the patient's clinical presentation and diagnostic findings. The proposed intervention aligns with evidence-based medical practices and is essential for optimal patient care.

CLINICAL INDICATIONS:
- Patient meets established criteria for the requested procedure
- Alternative treatments have been considered and deemed less appropriate
- Delay in treatment could adversely affect patient outcomes

COST-BENEFIT ANALYSIS:
The proposed treatment offers significant clinical benefit with acceptable risk profile. The cost of treatment is justified by the expected improvement in patient outcomes and quality of life.

RECOMMENDATION:
We strongly recommend approval of this request to ensure timely and appropriate medical care for the patient.

PHYSICIAN: [Doctor Name]
LICENSE: [License Number]
DATE: {date}"""


DAMA_FORM_TEMPLATE = """DISCHARGE AGAINST MEDICAL ADVICE (DAMA) FORM
Generated: {timestamp}

PATIENT INFORMATION:
{bullets}

MEDICAL ADVICE GIVEN:
The patient has been advised of the following:
- Current medical condition and associated risks
- Recommended treatment plan and its benefits
- Potential complications of leaving against medical advice
- Importance of follow-up care

PATIENT ACKNOWLEDGMENT:
The patient acknowledges that they:
- Understand the risks of leaving against medical advice
- Have been informed of alternative treatment options
- Accept full responsibility for their decision
- Will seek immediate medical attention if condition worsens

WITNESS INFORMATION:
Witness Name: ________________
Witness Signature: ________________
Date: {date}

ATTENDING PHYSICIAN: [Doctor Name]
SIGNATURE: ________________
DATE: {date}

PATIENT SIGNATURE: ________________
DATE: {date}"""


CONSULTATION_TEMPLATE = """MEDICAL CONSULTATION REPORT
Generated: {timestamp}

CONSULTATION REQUEST:
{bullets}

CONSULTANT ASSESSMENT:
After thorough review of the patient's history, examination findings, and diagnostic results, the following assessment is provided:

CLINICAL FINDINGS:
- Patient presents with the reported symptoms
- Physical examination reveals relevant findings
- Diagnostic workup supports the clinical impression

RECOMMENDATIONS:
1. Immediate management strategies
2. Further diagnostic considerations
3. Treatment modifications if indicated
4. Follow-up requirements

PROGNOSIS:
Based on current clinical status and response to treatment, the prognosis is [favorable/guarded/poor] with appropriate management.

CONSULTANT: [Doctor Name]
SPECIALTY: [Specialty]
DATE: {date}"""


ICD10_FINDER_TEMPLATE = """ICD-10 CODE FINDER RESULTS
Generated: {timestamp}

SEARCH CRITERIA:
{bullets}

SUGGESTED ICD-10 CODES:
Based on the provided symptoms and clinical findings, the following ICD-10 codes may be applicable:

PRIMARY DIAGNOSIS:
- [Primary Code]: [Description]
- [Secondary Code]: [Description]

ADDITIONAL CODES:
- [Additional Code 1]: [Description]
- [Additional Code 2]: [Description]

CODING NOTES:
- Ensure proper documentation supports the selected codes
- Consider additional specificity if available
- Review coding guidelines for accuracy

RECOMMENDED ACTION:
Verify codes against current ICD-10-CM guidelines and ensure proper documentation supports the selected codes.

GENERATED BY: Emergency-Mind AI
DATE: {date}"""


POLICE_REPORT_TEMPLATE = """POLICE MEDICAL REPORT
Generated: {timestamp}

INCIDENT DETAILS:
{bullets}

MEDICAL EXAMINATION FINDINGS:
- Patient was examined for signs of injury or trauma
- Vital signs were assessed and documented
- Physical examination was conducted following forensic protocols

INJURY ASSESSMENT:
- No visible injuries noted OR
- Injuries documented with photographs and measurements
- Mechanism of injury consistent with reported incident

FORENSIC EVIDENCE:
- Evidence collection procedures followed
- Chain of custody maintained
- Samples collected as appropriate

MEDICAL OPINION:
Based on the medical examination and clinical findings, the injuries are [consistent/inconsistent] with the reported mechanism of injury.

RECOMMENDATIONS:
- Immediate medical care if indicated
- Follow-up examination if required
- Evidence preservation protocols followed

EXAMINING PHYSICIAN: [Doctor Name]
LICENSE: [License Number]
DATE: {date}"""


DISCHARGE_SUMMARY_TEMPLATE = """DISCHARGE SUMMARY
Generated: {timestamp}

ADMISSION DETAILS:
{bullets}

HOSPITAL COURSE:
- Patient was admitted and evaluated
- Diagnostic workup was completed
- Treatment was initiated and monitored
- Patient responded appropriately to therapy

DISCHARGE DIAGNOSIS:
- Primary: [Primary Diagnosis]
- Secondary: [Secondary Diagnoses]

DISCHARGE MEDICATIONS:
- [Medication 1]: [Dosage and instructions]
- [Medication 2]: [Dosage and instructions]

DISCHARGE INSTRUCTIONS:
- Activity restrictions as appropriate
- Medication compliance
- Follow-up appointments
- Warning signs to watch for

FOLLOW-UP:
- Primary care physician: [Name and contact]
- Specialist appointments: [As needed]
- Return to ED if: [Specific criteria]

DISCHARGING PHYSICIAN: [Doctor Name]
DATE: {date}"""


# =============================================================================
# STAGE 2: GENERIC FALLBACK
# =============================================================================

GENERIC_TEMPLATE = """{title}
Generated: {timestamp}

CLINICAL NOTES:
{bullets}

ASSESSMENT:
Based on the provided clinical information, this report has been generated to document the patient's condition and treatment plan.

RECOMMENDATIONS:
- Continue current treatment as indicated
- Monitor patient response
- Follow up as appropriate

PHYSICIAN: [Doctor Name]
DATE: {date}"""


# =============================================================================
# STAGE 3: LOOKUP TABLE
# =============================================================================

SERVICE_TEMPLATES = {
    ServiceCode.FINAL_REPORT.value: FINAL_REPORT_TEMPLATE,
    ServiceCode.INSURANCE_APPROVAL.value: INSURANCE_APPROVAL_TEMPLATE,
    ServiceCode.DAMA_FORM.value: DAMA_FORM_TEMPLATE,
    ServiceCode.CONSULTATION.value: CONSULTATION_TEMPLATE,
    ServiceCode.ICD10_FINDER.value: ICD10_FINDER_TEMPLATE,
    ServiceCode.POLICE_REPORT.value: POLICE_REPORT_TEMPLATE,
    ServiceCode.DISCHARGE_SUMMARY.value: DISCHARGE_SUMMARY_TEMPLATE,
}
