# Models package: inquiry data shapes.

from inquiry_relay.models.inquiry import InquirySubmission, RawInquiry  # noqa: F401
